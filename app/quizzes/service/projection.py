"""Learner-facing views of a quiz before and after submission."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from app.db.models.quiz_attempts import QuizAttempt
from app.db.models.quiz_user_answers import QuizUserAnswer
from app.quizzes.evaluation import is_pending_review
from app.quizzes.scoring import ZERO_SCORE
from app.quizzes.types import (
    AnswerOptionTakeView,
    AttemptHistoryEntry,
    AttemptResultView,
    QuestionDefinition,
    QuestionResultView,
    QuestionTakeView,
    QuestionType,
    QuizDefinition,
    QuizTakeView,
)


def build_take_view(
    quiz: QuizDefinition,
    *,
    attempts: Sequence[QuizAttempt],
) -> QuizTakeView:
    """Quiz as served for taking. Correctness data never leaves this function."""
    completed_scores = [
        attempt.score
        for attempt in attempts
        if attempt.completed_at is not None and attempt.score is not None
    ]
    attempt_count = len(attempts)
    return QuizTakeView(
        quiz_id=quiz.quiz_id,
        title=quiz.title,
        description=quiz.description,
        passing_score=quiz.passing_score,
        time_limit_minutes=quiz.time_limit_minutes,
        randomize_questions=quiz.randomize_questions,
        max_attempts=quiz.max_attempts,
        attempt_count=attempt_count,
        can_attempt=quiz.can_attempt(attempt_count=attempt_count),
        questions=[
            QuestionTakeView(
                question_id=question.question_id,
                question_type=question.question_type,
                text=question.text,
                points=question.points,
                options=[
                    AnswerOptionTakeView(option_id=option.option_id, text=option.text)
                    for option in question.options
                ],
            )
            for question in quiz.questions
        ],
        best_score=max(completed_scores) if completed_scores else None,
        has_passed=any(
            attempt.completed_at is not None and attempt.passed for attempt in attempts
        ),
    )


def _disclose_correct_answer(question: QuestionDefinition, result: QuestionResultView) -> None:
    if question.question_type is QuestionType.FILL_BLANK:
        result.acceptable_answers = question.acceptable_answers
        return
    result.correct_option_texts = [option.text for option in question.correct_options]


def _apply_user_answer(
    question: QuestionDefinition,
    user_answer: QuizUserAnswer,
    result: QuestionResultView,
) -> None:
    result.is_correct = bool(user_answer.is_correct)
    result.points_earned = user_answer.points_earned
    if user_answer.selected_option_id is not None:
        result.selected_option_id = user_answer.selected_option_id
        selected = question.option_by_id(user_answer.selected_option_id)
        if selected is not None:
            result.selected_option_text = selected.text
    if user_answer.selected_option_ids:
        result.selected_option_ids = sorted(user_answer.selected_option_ids)
    if user_answer.text_answer is not None:
        result.text_answer = user_answer.text_answer


def build_result_view(
    quiz: QuizDefinition,
    *,
    attempt: QuizAttempt,
    user_answers: Iterable[QuizUserAnswer],
) -> AttemptResultView:
    """Post-submission view covering every question of the quiz.

    Skipped questions are reported as incorrect with zero points. Correct
    answers are disclosed only when the quiz shows feedback immediately.
    """
    answers_by_question = {answer.question_id: answer for answer in user_answers}
    question_results: list[QuestionResultView] = []
    for question in quiz.questions:
        result = QuestionResultView(
            question_id=question.question_id,
            question_type=question.question_type,
            text=question.text,
            is_correct=False,
            points_earned=0,
            points_possible=question.points,
            explanation=question.explanation,
            pending_review=is_pending_review(question.question_type),
        )
        user_answer = answers_by_question.get(question.question_id)
        if user_answer is not None:
            _apply_user_answer(question, user_answer, result)
        if quiz.show_feedback_immediately:
            _disclose_correct_answer(question, result)
        question_results.append(result)

    return AttemptResultView(
        attempt_id=attempt.id,
        quiz_id=attempt.quiz_id,
        score=attempt.score if attempt.score is not None else ZERO_SCORE,
        passed=bool(attempt.passed),
        time_spent_seconds=attempt.time_spent_seconds,
        completed_at=attempt.completed_at,
        question_results=question_results,
    )


def build_history_entry(attempt: QuizAttempt) -> AttemptHistoryEntry:
    return AttemptHistoryEntry(
        attempt_id=attempt.id,
        attempt_number=attempt.attempt_number,
        score=attempt.score,
        passed=bool(attempt.passed),
        started_at=attempt.started_at,
        completed_at=attempt.completed_at,
        time_spent_seconds=attempt.time_spent_seconds,
    )
