from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_user_answers import QuizUserAnswer


class QuizUserAnswersRepo:
    @staticmethod
    async def create_many(
        session: AsyncSession,
        *,
        answers: Sequence[QuizUserAnswer],
    ) -> list[QuizUserAnswer]:
        session.add_all(list(answers))
        await session.flush()
        return list(answers)

    @staticmethod
    async def list_for_attempt(session: AsyncSession, *, attempt_id: int) -> list[QuizUserAnswer]:
        stmt = (
            select(QuizUserAnswer)
            .where(QuizUserAnswer.attempt_id == attempt_id)
            .order_by(QuizUserAnswer.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
