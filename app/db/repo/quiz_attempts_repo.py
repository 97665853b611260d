from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_attempts import QuizAttempt


class QuizAttemptsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, attempt_id: int) -> QuizAttempt | None:
        return await session.get(QuizAttempt, attempt_id)

    @staticmethod
    async def create(session: AsyncSession, *, attempt: QuizAttempt) -> QuizAttempt:
        session.add(attempt)
        await session.flush()
        return attempt

    @staticmethod
    async def count_for_user_quiz(session: AsyncSession, *, user_id: int, quiz_id: int) -> int:
        stmt = select(func.count(QuizAttempt.id)).where(
            QuizAttempt.user_id == user_id,
            QuizAttempt.quiz_id == quiz_id,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def get_max_attempt_number(session: AsyncSession, *, user_id: int, quiz_id: int) -> int:
        stmt = select(func.max(QuizAttempt.attempt_number)).where(
            QuizAttempt.user_id == user_id,
            QuizAttempt.quiz_id == quiz_id,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def list_for_user_quiz(
        session: AsyncSession,
        *,
        user_id: int,
        quiz_id: int,
    ) -> list[QuizAttempt]:
        stmt = (
            select(QuizAttempt)
            .where(
                QuizAttempt.user_id == user_id,
                QuizAttempt.quiz_id == quiz_id,
            )
            .order_by(QuizAttempt.started_at.desc(), QuizAttempt.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def claim_for_completion(
        session: AsyncSession,
        *,
        attempt_id: int,
        completed_at: datetime,
    ) -> bool:
        stmt = (
            update(QuizAttempt)
            .where(
                QuizAttempt.id == attempt_id,
                QuizAttempt.completed_at.is_(None),
            )
            .values(completed_at=completed_at)
            .returning(QuizAttempt.id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
