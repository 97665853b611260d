"""Per-question answer evaluation.

Each question type has exactly one evaluator and one submitted-answer
variant. Correctness is all-or-nothing: a question earns its full points or
none.
"""

from __future__ import annotations

from collections.abc import Callable

from app.quizzes.errors import AnswerOptionNotFoundError
from app.quizzes.types import (
    AnswerEvaluation,
    AnswerSubmission,
    FillBlankAnswer,
    MultipleChoiceAnswer,
    QuestionDefinition,
    QuestionType,
    ShortAnswerAnswer,
    SubmittedAnswer,
    TrueFalseAnswer,
)


def parse_acceptable_answers(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return ()
    return tuple(
        normalized
        for normalized in (value.strip().lower() for value in raw.split(","))
        if normalized
    )


def _normalize_text_answer(text_answer: str | None) -> str | None:
    if text_answer is None or not text_answer.strip():
        return None
    return text_answer


def _require_option(question: QuestionDefinition, option_id: int) -> None:
    if question.option_by_id(option_id) is None:
        raise AnswerOptionNotFoundError


def build_submitted_answer(
    question: QuestionDefinition,
    submission: AnswerSubmission,
) -> SubmittedAnswer:
    """Narrow a raw submission to the variant of the question's type.

    Fields that do not apply to the question type are ignored. Every referenced
    option id must belong to the question.
    """
    question_type = question.question_type
    if question_type is QuestionType.TRUE_FALSE:
        if submission.selected_option_id is not None:
            _require_option(question, submission.selected_option_id)
        return TrueFalseAnswer(
            question_id=question.question_id,
            selected_option_id=submission.selected_option_id,
        )
    if question_type is QuestionType.MULTIPLE_CHOICE:
        selected_ids = tuple(sorted(set(submission.selected_option_ids or ())))
        for option_id in selected_ids:
            _require_option(question, option_id)
        return MultipleChoiceAnswer(
            question_id=question.question_id,
            selected_option_ids=selected_ids,
        )
    if question_type is QuestionType.FILL_BLANK:
        return FillBlankAnswer(
            question_id=question.question_id,
            text_answer=_normalize_text_answer(submission.text_answer),
        )
    if question_type is QuestionType.SHORT_ANSWER:
        return ShortAnswerAnswer(
            question_id=question.question_id,
            text_answer=_normalize_text_answer(submission.text_answer),
        )
    raise ValueError(f"unsupported question type: {question_type!r}")


def _graded(question: QuestionDefinition, *, is_correct: bool) -> AnswerEvaluation:
    return AnswerEvaluation(
        is_correct=is_correct,
        points_earned=question.points if is_correct else 0,
    )


def _evaluate_true_false(question: QuestionDefinition, answer: TrueFalseAnswer) -> AnswerEvaluation:
    if answer.selected_option_id is None:
        return _graded(question, is_correct=False)
    option = question.option_by_id(answer.selected_option_id)
    return _graded(question, is_correct=option is not None and option.is_correct)


def _evaluate_multiple_choice(
    question: QuestionDefinition,
    answer: MultipleChoiceAnswer,
) -> AnswerEvaluation:
    if not answer.selected_option_ids:
        return _graded(question, is_correct=False)
    correct_ids = sorted(option.option_id for option in question.correct_options)
    return _graded(question, is_correct=correct_ids == sorted(set(answer.selected_option_ids)))


def _evaluate_fill_blank(question: QuestionDefinition, answer: FillBlankAnswer) -> AnswerEvaluation:
    if answer.text_answer is None or not answer.text_answer.strip():
        return _graded(question, is_correct=False)
    submitted = answer.text_answer.strip().lower()
    accepted = parse_acceptable_answers(question.acceptable_answers)
    return _graded(question, is_correct=submitted in accepted)


def _evaluate_short_answer(
    question: QuestionDefinition,
    answer: ShortAnswerAnswer,
) -> AnswerEvaluation:
    # No automatic grading for free text; surfaced as pending review.
    del answer
    return AnswerEvaluation(is_correct=False, points_earned=0, pending_review=True)


_EVALUATORS: dict[QuestionType, tuple[type, Callable[..., AnswerEvaluation]]] = {
    QuestionType.TRUE_FALSE: (TrueFalseAnswer, _evaluate_true_false),
    QuestionType.MULTIPLE_CHOICE: (MultipleChoiceAnswer, _evaluate_multiple_choice),
    QuestionType.FILL_BLANK: (FillBlankAnswer, _evaluate_fill_blank),
    QuestionType.SHORT_ANSWER: (ShortAnswerAnswer, _evaluate_short_answer),
}

_missing_evaluators = set(QuestionType) - set(_EVALUATORS)
if _missing_evaluators:
    raise RuntimeError(
        f"no evaluator registered for: {sorted(item.value for item in _missing_evaluators)}"
    )


def evaluate_answer(question: QuestionDefinition, answer: SubmittedAnswer) -> AnswerEvaluation:
    answer_type, evaluator = _EVALUATORS[question.question_type]
    if not isinstance(answer, answer_type):
        raise TypeError(
            f"{type(answer).__name__} cannot answer a {question.question_type.value} question"
        )
    if answer.question_id != question.question_id:
        raise ValueError("answer does not belong to the evaluated question")
    return evaluator(question, answer)


def is_pending_review(question_type: QuestionType) -> bool:
    return question_type is QuestionType.SHORT_ANSWER
