from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    FILL_BLANK = "FILL_BLANK"
    SHORT_ANSWER = "SHORT_ANSWER"


@dataclass(frozen=True, slots=True)
class AnswerOptionDefinition:
    option_id: int
    text: str
    is_correct: bool
    order: int


@dataclass(frozen=True, slots=True)
class QuestionDefinition:
    question_id: int
    question_type: QuestionType
    text: str
    points: int
    order: int
    options: tuple[AnswerOptionDefinition, ...] = ()
    explanation: str | None = None
    # Raw comma-separated list, FILL_BLANK only.
    acceptable_answers: str | None = None

    def option_by_id(self, option_id: int) -> AnswerOptionDefinition | None:
        for option in self.options:
            if option.option_id == option_id:
                return option
        return None

    @property
    def correct_options(self) -> tuple[AnswerOptionDefinition, ...]:
        return tuple(option for option in self.options if option.is_correct)


@dataclass(frozen=True, slots=True)
class QuizDefinition:
    quiz_id: int
    title: str
    passing_score: int
    questions: tuple[QuestionDefinition, ...] = ()
    description: str | None = None
    time_limit_minutes: int | None = None
    randomize_questions: bool = False
    show_feedback_immediately: bool = True
    max_attempts: int | None = None

    @property
    def total_points(self) -> int:
        return sum(question.points for question in self.questions)

    def question_by_id(self, question_id: int) -> QuestionDefinition | None:
        for question in self.questions:
            if question.question_id == question_id:
                return question
        return None

    def can_attempt(self, *, attempt_count: int) -> bool:
        return self.max_attempts is None or attempt_count < self.max_attempts


@dataclass(frozen=True, slots=True)
class AnswerSubmission:
    """One entry of a submit payload, before it is matched to a question type."""

    question_id: int
    selected_option_id: int | None = None
    selected_option_ids: tuple[int, ...] | None = None
    text_answer: str | None = None


@dataclass(frozen=True, slots=True)
class TrueFalseAnswer:
    question_id: int
    selected_option_id: int | None


@dataclass(frozen=True, slots=True)
class MultipleChoiceAnswer:
    question_id: int
    # Sorted and de-duplicated.
    selected_option_ids: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class FillBlankAnswer:
    question_id: int
    text_answer: str | None


@dataclass(frozen=True, slots=True)
class ShortAnswerAnswer:
    question_id: int
    text_answer: str | None


SubmittedAnswer = TrueFalseAnswer | MultipleChoiceAnswer | FillBlankAnswer | ShortAnswerAnswer


@dataclass(frozen=True, slots=True)
class AnswerEvaluation:
    is_correct: bool
    points_earned: int
    pending_review: bool = False


@dataclass(slots=True)
class AnswerOptionTakeView:
    option_id: int
    text: str


@dataclass(slots=True)
class QuestionTakeView:
    question_id: int
    question_type: QuestionType
    text: str
    points: int
    options: list[AnswerOptionTakeView] = field(default_factory=list)


@dataclass(slots=True)
class QuizTakeView:
    quiz_id: int
    title: str
    description: str | None
    passing_score: int
    time_limit_minutes: int | None
    randomize_questions: bool
    max_attempts: int | None
    attempt_count: int
    can_attempt: bool
    questions: list[QuestionTakeView]
    best_score: Decimal | None = None
    has_passed: bool = False


@dataclass(slots=True)
class AttemptStartResult:
    attempt_id: int
    attempt_number: int
    started_at: datetime
    time_limit_minutes: int | None


@dataclass(slots=True)
class QuestionResultView:
    question_id: int
    question_type: QuestionType
    text: str
    is_correct: bool
    points_earned: int
    points_possible: int
    explanation: str | None = None
    selected_option_id: int | None = None
    selected_option_ids: list[int] | None = None
    selected_option_text: str | None = None
    text_answer: str | None = None
    pending_review: bool = False
    correct_option_texts: list[str] | None = None
    acceptable_answers: str | None = None


@dataclass(slots=True)
class AttemptResultView:
    attempt_id: int
    quiz_id: int
    score: Decimal
    passed: bool
    time_spent_seconds: int | None
    completed_at: datetime | None
    question_results: list[QuestionResultView]


@dataclass(slots=True)
class AttemptHistoryEntry:
    attempt_id: int
    attempt_number: int
    score: Decimal | None
    passed: bool
    started_at: datetime
    completed_at: datetime | None
    time_spent_seconds: int | None
