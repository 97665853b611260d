from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class QuizAnswerOption(Base):
    __tablename__ = "quiz_answer_options"
    __table_args__ = (
        UniqueConstraint("question_id", "option_order", name="uq_quiz_answer_options_question_order"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    question_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("quiz_questions.id"),
        nullable=False,
    )
    option_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    option_order: Mapped[int] = mapped_column(Integer, nullable=False)
    # Legacy FILL_BLANK storage; new rows keep the list on quiz_questions.
    acceptable_answers: Mapped[str | None] = mapped_column(Text, nullable=True)
