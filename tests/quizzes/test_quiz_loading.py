from __future__ import annotations

import pytest

from app.db.models.quiz_answer_options import QuizAnswerOption
from app.db.models.quiz_questions import QuizQuestion
from app.db.models.quizzes import Quiz
from app.quizzes.errors import QuizNotFoundError
from app.quizzes.service.quiz_loading import build_quiz_definition, load_quiz_definition
from app.quizzes.types import QuestionType
from tests.quizzes.quiz_fixtures import FakeQuizStore, seed_mixed_quiz


def _quiz() -> Quiz:
    return Quiz(
        id=5,
        title="Geography",
        description=None,
        passing_score=60,
        time_limit_minutes=None,
        randomize_questions=True,
        show_feedback_immediately=True,
        max_attempts=3,
    )


def _question(question_id: int, *, question_type: str, order: int, acceptable_answers: str | None = None) -> QuizQuestion:
    return QuizQuestion(
        id=question_id,
        quiz_id=5,
        question_type=question_type,
        question_text=f"Q{question_id}",
        explanation=None,
        points=1,
        question_order=order,
        acceptable_answers=acceptable_answers,
    )


def _option(option_id: int, question_id: int, *, order: int, acceptable_answers: str | None = None) -> QuizAnswerOption:
    return QuizAnswerOption(
        id=option_id,
        question_id=question_id,
        option_text=f"O{option_id}",
        is_correct=False,
        option_order=order,
        acceptable_answers=acceptable_answers,
    )


def test_questions_and_options_follow_authoring_order() -> None:
    definition = build_quiz_definition(
        _quiz(),
        questions=[
            _question(2, question_type="TRUE_FALSE", order=2),
            _question(1, question_type="MULTIPLE_CHOICE", order=1),
        ],
        options=[
            _option(12, 1, order=2),
            _option(11, 1, order=1),
            _option(21, 2, order=1),
        ],
    )

    assert [question.question_id for question in definition.questions] == [1, 2]
    assert [option.option_id for option in definition.questions[0].options] == [11, 12]
    assert definition.questions[0].question_type is QuestionType.MULTIPLE_CHOICE
    assert definition.randomize_questions is True
    assert definition.max_attempts == 3


def test_fill_blank_prefers_question_level_accepted_answers() -> None:
    definition = build_quiz_definition(
        _quiz(),
        questions=[_question(1, question_type="FILL_BLANK", order=1, acceptable_answers="Rome")],
        options=[_option(11, 1, order=1, acceptable_answers="Paris")],
    )

    assert definition.questions[0].acceptable_answers == "Rome"


def test_fill_blank_falls_back_to_first_option_list() -> None:
    definition = build_quiz_definition(
        _quiz(),
        questions=[_question(1, question_type="FILL_BLANK", order=1)],
        options=[
            _option(12, 1, order=2, acceptable_answers="Lyon"),
            _option(11, 1, order=1, acceptable_answers="Paris,paris"),
        ],
    )

    assert definition.questions[0].acceptable_answers == "Paris,paris"


def test_accepted_answers_are_ignored_for_other_types() -> None:
    definition = build_quiz_definition(
        _quiz(),
        questions=[_question(1, question_type="SHORT_ANSWER", order=1, acceptable_answers="x")],
        options=[],
    )

    assert definition.questions[0].acceptable_answers is None


@pytest.mark.asyncio
async def test_load_quiz_definition_reads_through_repos(monkeypatch: pytest.MonkeyPatch) -> None:
    store = FakeQuizStore()
    store.install(monkeypatch)
    seed_mixed_quiz(store)

    definition = await load_quiz_definition(object(), quiz_id=1)

    assert definition.total_points == 5
    assert [question.question_id for question in definition.questions] == [11, 12, 13, 14]


@pytest.mark.asyncio
async def test_load_quiz_definition_missing_quiz(monkeypatch: pytest.MonkeyPatch) -> None:
    FakeQuizStore().install(monkeypatch)

    with pytest.raises(QuizNotFoundError):
        await load_quiz_definition(object(), quiz_id=99)
