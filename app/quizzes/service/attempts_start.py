from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_attempts import QuizAttempt
from app.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from app.db.repo.quizzes_repo import QuizzesRepo
from app.quizzes.errors import (
    AttemptStartConflictError,
    MaxAttemptsReachedError,
    QuizNotFoundError,
)
from app.quizzes.types import AttemptStartResult

logger = structlog.get_logger("app.quizzes.attempts.start")

SLOT_ALLOCATION_ATTEMPTS = 3


async def start_attempt(
    session: AsyncSession,
    *,
    quiz_id: int,
    user_id: int,
    now_utc: datetime,
) -> AttemptStartResult:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError

    attempt_count = await QuizAttemptsRepo.count_for_user_quiz(
        session,
        user_id=user_id,
        quiz_id=quiz_id,
    )
    if quiz.max_attempts is not None and attempt_count >= quiz.max_attempts:
        logger.info(
            "quiz_attempt_limit_reached",
            user_id=user_id,
            quiz_id=quiz_id,
            attempt_count=attempt_count,
            max_attempts=quiz.max_attempts,
        )
        raise MaxAttemptsReachedError

    # Slots are unique per (user, quiz). A concurrent start that took the same
    # slot makes the insert fail inside a savepoint; the next free slot is tried
    # until the limit is hit.
    attempt_number = 0
    created: QuizAttempt | None = None
    for _ in range(SLOT_ALLOCATION_ATTEMPTS):
        attempt_number = max(
            await QuizAttemptsRepo.get_max_attempt_number(session, user_id=user_id, quiz_id=quiz_id) + 1,
            attempt_number + 1,
        )
        if quiz.max_attempts is not None and attempt_number > quiz.max_attempts:
            logger.info(
                "quiz_attempt_limit_reached",
                user_id=user_id,
                quiz_id=quiz_id,
                attempt_number=attempt_number,
                max_attempts=quiz.max_attempts,
            )
            raise MaxAttemptsReachedError
        try:
            async with session.begin_nested():
                created = await QuizAttemptsRepo.create(
                    session,
                    attempt=QuizAttempt(
                        user_id=user_id,
                        quiz_id=quiz_id,
                        attempt_number=attempt_number,
                        started_at=now_utc,
                        completed_at=None,
                        score=None,
                        passed=False,
                        time_spent_seconds=None,
                    ),
                )
        except IntegrityError:
            logger.warning(
                "quiz_attempt_slot_collision",
                user_id=user_id,
                quiz_id=quiz_id,
                attempt_number=attempt_number,
            )
            continue
        break

    if created is None:
        raise AttemptStartConflictError

    logger.info(
        "quiz_attempt_started",
        user_id=user_id,
        quiz_id=quiz_id,
        attempt_id=created.id,
        attempt_number=attempt_number,
    )
    return AttemptStartResult(
        attempt_id=created.id,
        attempt_number=created.attempt_number,
        started_at=created.started_at,
        time_limit_minutes=quiz.time_limit_minutes,
    )
