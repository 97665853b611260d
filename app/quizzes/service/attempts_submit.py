from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_attempts import QuizAttempt
from app.db.models.quiz_user_answers import QuizUserAnswer
from app.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from app.db.repo.quiz_user_answers_repo import QuizUserAnswersRepo
from app.quizzes.errors import (
    AttemptAccessError,
    AttemptAlreadySubmittedError,
    AttemptNotFoundError,
    DuplicateAnswerError,
    QuestionNotInQuizError,
)
from app.quizzes.evaluation import build_submitted_answer, evaluate_answer
from app.quizzes.scoring import compute_score_percent, is_passed, time_spent_seconds
from app.quizzes.types import (
    AnswerSubmission,
    AttemptResultView,
    FillBlankAnswer,
    MultipleChoiceAnswer,
    QuestionDefinition,
    QuizDefinition,
    ShortAnswerAnswer,
    SubmittedAnswer,
    TrueFalseAnswer,
)

from .projection import build_result_view
from .quiz_loading import load_quiz_definition

logger = structlog.get_logger("app.quizzes.attempts.submit")


async def load_owned_attempt(
    session: AsyncSession,
    *,
    attempt_id: int,
    user_id: int,
) -> QuizAttempt:
    attempt = await QuizAttemptsRepo.get_by_id(session, attempt_id)
    if attempt is None:
        raise AttemptNotFoundError
    if attempt.user_id != user_id:
        logger.warning(
            "quiz_attempt_access_denied",
            attempt_id=attempt_id,
            user_id=user_id,
        )
        raise AttemptAccessError
    return attempt


def resolve_submitted_answers(
    quiz: QuizDefinition,
    submissions: Sequence[AnswerSubmission],
) -> list[tuple[QuestionDefinition, SubmittedAnswer]]:
    resolved: list[tuple[QuestionDefinition, SubmittedAnswer]] = []
    seen_question_ids: set[int] = set()
    for submission in submissions:
        question = quiz.question_by_id(submission.question_id)
        if question is None:
            raise QuestionNotInQuizError
        if question.question_id in seen_question_ids:
            raise DuplicateAnswerError
        seen_question_ids.add(question.question_id)
        resolved.append((question, build_submitted_answer(question, submission)))
    return resolved


def _build_user_answer_row(
    *,
    attempt_id: int,
    answer: SubmittedAnswer,
    is_correct: bool,
    points_earned: int,
) -> QuizUserAnswer:
    row = QuizUserAnswer(
        attempt_id=attempt_id,
        question_id=answer.question_id,
        selected_option_id=None,
        selected_option_ids=None,
        text_answer=None,
        is_correct=is_correct,
        points_earned=points_earned,
    )
    if isinstance(answer, TrueFalseAnswer):
        row.selected_option_id = answer.selected_option_id
    elif isinstance(answer, MultipleChoiceAnswer):
        row.selected_option_ids = list(answer.selected_option_ids) or None
    elif isinstance(answer, (FillBlankAnswer, ShortAnswerAnswer)):
        row.text_answer = answer.text_answer
    return row


async def submit_answers(
    session: AsyncSession,
    *,
    attempt_id: int,
    user_id: int,
    answers: Sequence[AnswerSubmission],
    now_utc: datetime,
) -> AttemptResultView:
    attempt = await load_owned_attempt(session, attempt_id=attempt_id, user_id=user_id)
    if attempt.completed_at is not None:
        logger.info(
            "quiz_attempt_resubmit_rejected",
            attempt_id=attempt_id,
            user_id=user_id,
        )
        raise AttemptAlreadySubmittedError

    quiz = await load_quiz_definition(session, quiz_id=attempt.quiz_id)
    resolved = resolve_submitted_answers(quiz, answers)

    # Compare-and-set on completed_at; the rest of the transaction runs only
    # for the request that won the claim.
    claimed = await QuizAttemptsRepo.claim_for_completion(
        session,
        attempt_id=attempt.id,
        completed_at=now_utc,
    )
    if not claimed:
        logger.info(
            "quiz_attempt_resubmit_rejected",
            attempt_id=attempt_id,
            user_id=user_id,
            reason="concurrent_claim",
        )
        raise AttemptAlreadySubmittedError

    rows: list[QuizUserAnswer] = []
    earned_points = 0
    for question, answer in resolved:
        evaluation = evaluate_answer(question, answer)
        earned_points += evaluation.points_earned
        rows.append(
            _build_user_answer_row(
                attempt_id=attempt.id,
                answer=answer,
                is_correct=evaluation.is_correct,
                points_earned=evaluation.points_earned,
            )
        )

    try:
        await QuizUserAnswersRepo.create_many(session, answers=rows)
    except IntegrityError as exc:
        raise AttemptAlreadySubmittedError from exc

    score = compute_score_percent(earned_points=earned_points, total_points=quiz.total_points)
    passed = is_passed(score=score, passing_score=quiz.passing_score)

    attempt.completed_at = now_utc
    attempt.score = score
    attempt.passed = passed
    attempt.time_spent_seconds = time_spent_seconds(
        started_at=attempt.started_at,
        completed_at=now_utc,
    )

    logger.info(
        "quiz_attempt_submitted",
        attempt_id=attempt.id,
        quiz_id=attempt.quiz_id,
        user_id=user_id,
        answered_questions=len(rows),
        total_questions=len(quiz.questions),
        earned_points=earned_points,
        total_points=quiz.total_points,
        score=str(score),
        passed=passed,
    )
    return build_result_view(quiz, attempt=attempt, user_answers=rows)
