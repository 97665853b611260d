from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from app.db.repo.quiz_user_answers_repo import QuizUserAnswersRepo
from app.db.repo.quizzes_repo import QuizzesRepo
from app.quizzes.errors import AttemptNotCompletedError, QuizNotFoundError
from app.quizzes.types import AttemptHistoryEntry, AttemptResultView, QuizTakeView

from .attempts_submit import load_owned_attempt
from .projection import build_history_entry, build_result_view, build_take_view
from .quiz_loading import load_quiz_definition


async def get_quiz_for_taking(
    session: AsyncSession,
    *,
    quiz_id: int,
    user_id: int,
) -> QuizTakeView:
    quiz = await load_quiz_definition(session, quiz_id=quiz_id)
    attempts = await QuizAttemptsRepo.list_for_user_quiz(session, user_id=user_id, quiz_id=quiz_id)
    return build_take_view(quiz, attempts=attempts)


async def get_attempt_result(
    session: AsyncSession,
    *,
    attempt_id: int,
    user_id: int,
) -> AttemptResultView:
    attempt = await load_owned_attempt(session, attempt_id=attempt_id, user_id=user_id)
    if attempt.completed_at is None:
        raise AttemptNotCompletedError
    quiz = await load_quiz_definition(session, quiz_id=attempt.quiz_id)
    user_answers = await QuizUserAnswersRepo.list_for_attempt(session, attempt_id=attempt.id)
    return build_result_view(quiz, attempt=attempt, user_answers=user_answers)


async def list_attempts(
    session: AsyncSession,
    *,
    quiz_id: int,
    user_id: int,
) -> list[AttemptHistoryEntry]:
    if await QuizzesRepo.get_by_id(session, quiz_id) is None:
        raise QuizNotFoundError
    attempts = await QuizAttemptsRepo.list_for_user_quiz(session, user_id=user_id, quiz_id=quiz_id)
    return [build_history_entry(attempt) for attempt in attempts]
