"""quiz_attempt_engine_core

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5c1e9a7d2b40"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "quizzes",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("passing_score", sa.Integer(), nullable=False, server_default=sa.text("70")),
        sa.Column("time_limit_minutes", sa.Integer(), nullable=True),
        sa.Column(
            "randomize_questions",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "show_feedback_immediately",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column("max_attempts", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint(
            "passing_score >= 0 AND passing_score <= 100",
            name="ck_quizzes_passing_score_range",
        ),
        sa.CheckConstraint(
            "max_attempts IS NULL OR max_attempts >= 1",
            name="ck_quizzes_max_attempts_positive",
        ),
        sa.CheckConstraint(
            "time_limit_minutes IS NULL OR time_limit_minutes >= 1",
            name="ck_quizzes_time_limit_positive",
        ),
    )

    op.create_table(
        "quiz_questions",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("quiz_id", sa.BigInteger(), nullable=False),
        sa.Column("question_type", sa.String(16), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("question_order", sa.Integer(), nullable=False),
        sa.Column("acceptable_answers", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint(
            "question_type IN ('MULTIPLE_CHOICE','TRUE_FALSE','FILL_BLANK','SHORT_ANSWER')",
            name="ck_quiz_questions_type",
        ),
        sa.CheckConstraint("points >= 1", name="ck_quiz_questions_points_positive"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"]),
        sa.UniqueConstraint("quiz_id", "question_order", name="uq_quiz_questions_quiz_order"),
    )

    op.create_table(
        "quiz_answer_options",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("question_id", sa.BigInteger(), nullable=False),
        sa.Column("option_text", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("option_order", sa.Integer(), nullable=False),
        sa.Column("acceptable_answers", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["question_id"], ["quiz_questions.id"]),
        sa.UniqueConstraint(
            "question_id",
            "option_order",
            name="uq_quiz_answer_options_question_order",
        ),
    )

    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("quiz_id", sa.BigInteger(), nullable=False),
        sa.Column("attempt_number", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("score", sa.Numeric(5, 2), nullable=True),
        sa.Column("passed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("time_spent_seconds", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "score IS NULL OR (score >= 0 AND score <= 100)",
            name="ck_quiz_attempts_score_range",
        ),
        sa.CheckConstraint("attempt_number >= 1", name="ck_quiz_attempts_attempt_number_positive"),
        sa.CheckConstraint(
            "time_spent_seconds IS NULL OR time_spent_seconds >= 0",
            name="ck_quiz_attempts_time_spent_non_negative",
        ),
        sa.CheckConstraint(
            "(completed_at IS NULL) OR (completed_at >= started_at)",
            name="ck_quiz_attempts_completed_after_start",
        ),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"]),
        sa.UniqueConstraint(
            "user_id",
            "quiz_id",
            "attempt_number",
            name="uq_quiz_attempts_user_quiz_slot",
        ),
    )
    op.create_index(
        "idx_quiz_attempts_user_quiz_started",
        "quiz_attempts",
        ["user_id", "quiz_id", "started_at"],
    )

    op.create_table(
        "quiz_user_answers",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("attempt_id", sa.BigInteger(), nullable=False),
        sa.Column("question_id", sa.BigInteger(), nullable=False),
        sa.Column("selected_option_id", sa.BigInteger(), nullable=True),
        sa.Column("selected_option_ids", postgresql.ARRAY(sa.BigInteger()), nullable=True),
        sa.Column("text_answer", sa.Text(), nullable=True),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("points_earned", sa.Integer(), nullable=False),
        sa.CheckConstraint("points_earned >= 0", name="ck_quiz_user_answers_points_non_negative"),
        sa.ForeignKeyConstraint(["attempt_id"], ["quiz_attempts.id"]),
        sa.ForeignKeyConstraint(["question_id"], ["quiz_questions.id"]),
        sa.ForeignKeyConstraint(["selected_option_id"], ["quiz_answer_options.id"]),
        sa.UniqueConstraint(
            "attempt_id",
            "question_id",
            name="uq_quiz_user_answers_attempt_question",
        ),
    )


def downgrade() -> None:
    op.drop_table("quiz_user_answers")
    op.drop_index("idx_quiz_attempts_user_quiz_started", table_name="quiz_attempts")
    op.drop_table("quiz_attempts")
    op.drop_table("quiz_answer_options")
    op.drop_table("quiz_questions")
    op.drop_table("quizzes")
