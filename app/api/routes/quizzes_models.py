from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class AnswerOptionTakeResponse(BaseModel):
    id: int
    option_text: str


class QuestionTakeResponse(BaseModel):
    id: int
    question_type: str
    question_text: str
    points: int = Field(ge=1)
    answer_options: list[AnswerOptionTakeResponse]


class QuizTakeResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    passing_score: int = Field(ge=0, le=100)
    time_limit_minutes: int | None = None
    randomize_questions: bool
    max_attempts: int | None = None
    attempt_count: int = Field(ge=0)
    can_attempt: bool
    best_score: Decimal | None = None
    has_passed: bool
    questions: list[QuestionTakeResponse]


class AttemptStartResponse(BaseModel):
    attempt_id: int
    attempt_number: int = Field(ge=1)
    started_at: datetime
    time_limit_minutes: int | None = None


class UserAnswerRequest(BaseModel):
    question_id: int
    selected_option_id: int | None = None
    selected_option_ids: list[int] | None = None
    text_answer: str | None = Field(default=None, max_length=4000)


class SubmitAnswersRequest(BaseModel):
    answers: list[UserAnswerRequest] = Field(default_factory=list, max_length=500)


class QuestionResultResponse(BaseModel):
    question_id: int
    question_text: str
    question_type: str
    is_correct: bool
    points_earned: int = Field(ge=0)
    points_possible: int = Field(ge=1)
    explanation: str | None = None
    selected_option_id: int | None = None
    selected_option_ids: list[int] | None = None
    selected_option_text: str | None = None
    text_answer: str | None = None
    pending_review: bool = False
    correct_option_texts: list[str] | None = None
    acceptable_answers: str | None = None


class AttemptResultResponse(BaseModel):
    attempt_id: int
    quiz_id: int
    score: Decimal = Field(ge=0, le=100)
    passed: bool
    time_spent_seconds: int | None = None
    completed_at: datetime | None = None
    question_results: list[QuestionResultResponse]


class AttemptHistoryResponse(BaseModel):
    id: int
    attempt_number: int
    score: Decimal | None = None
    passed: bool
    started_at: datetime
    completed_at: datetime | None = None
    time_spent_seconds: int | None = None
