from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_answer_options import QuizAnswerOption
from app.db.models.quiz_questions import QuizQuestion


class QuizQuestionsRepo:
    @staticmethod
    async def list_for_quiz(session: AsyncSession, *, quiz_id: int) -> list[QuizQuestion]:
        stmt = (
            select(QuizQuestion)
            .where(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.question_order.asc(), QuizQuestion.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_options_for_questions(
        session: AsyncSession,
        *,
        question_ids: Sequence[int],
    ) -> list[QuizAnswerOption]:
        if not question_ids:
            return []
        stmt = (
            select(QuizAnswerOption)
            .where(QuizAnswerOption.question_id.in_(list(question_ids)))
            .order_by(
                QuizAnswerOption.question_id.asc(),
                QuizAnswerOption.option_order.asc(),
                QuizAnswerOption.id.asc(),
            )
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
