from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, CheckConstraint, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class QuizUserAnswer(Base):
    __tablename__ = "quiz_user_answers"
    __table_args__ = (
        CheckConstraint("points_earned >= 0", name="ck_quiz_user_answers_points_non_negative"),
        UniqueConstraint("attempt_id", "question_id", name="uq_quiz_user_answers_attempt_question"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    attempt_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("quiz_attempts.id"),
        nullable=False,
    )
    question_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("quiz_questions.id"),
        nullable=False,
    )
    selected_option_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("quiz_answer_options.id"),
        nullable=True,
    )
    selected_option_ids: Mapped[list[int] | None] = mapped_column(ARRAY(BigInteger), nullable=True)
    text_answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    points_earned: Mapped[int] = mapped_column(Integer, nullable=False)
