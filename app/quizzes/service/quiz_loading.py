from __future__ import annotations

from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quiz_answer_options import QuizAnswerOption
from app.db.models.quiz_questions import QuizQuestion
from app.db.models.quizzes import Quiz
from app.db.repo.quiz_questions_repo import QuizQuestionsRepo
from app.db.repo.quizzes_repo import QuizzesRepo
from app.quizzes.errors import QuizNotFoundError
from app.quizzes.types import (
    AnswerOptionDefinition,
    QuestionDefinition,
    QuestionType,
    QuizDefinition,
)


def _resolve_acceptable_answers(
    question: QuizQuestion,
    options: list[QuizAnswerOption],
) -> str | None:
    if question.question_type != QuestionType.FILL_BLANK.value:
        return None
    if question.acceptable_answers is not None and question.acceptable_answers.strip():
        return question.acceptable_answers
    # Older rows keep the list on the first option of the question.
    if options:
        return options[0].acceptable_answers
    return None


def _build_question_definition(
    question: QuizQuestion,
    options: list[QuizAnswerOption],
) -> QuestionDefinition:
    return QuestionDefinition(
        question_id=question.id,
        question_type=QuestionType(question.question_type),
        text=question.question_text,
        points=question.points,
        order=question.question_order,
        options=tuple(
            AnswerOptionDefinition(
                option_id=option.id,
                text=option.option_text,
                is_correct=bool(option.is_correct),
                order=option.option_order,
            )
            for option in options
        ),
        explanation=question.explanation,
        acceptable_answers=_resolve_acceptable_answers(question, options),
    )


def build_quiz_definition(
    quiz: Quiz,
    *,
    questions: list[QuizQuestion],
    options: list[QuizAnswerOption],
) -> QuizDefinition:
    options_by_question: dict[int, list[QuizAnswerOption]] = defaultdict(list)
    for option in sorted(options, key=lambda item: (item.option_order, item.id)):
        options_by_question[option.question_id].append(option)

    ordered_questions = sorted(questions, key=lambda item: (item.question_order, item.id))
    return QuizDefinition(
        quiz_id=quiz.id,
        title=quiz.title,
        description=quiz.description,
        passing_score=quiz.passing_score,
        time_limit_minutes=quiz.time_limit_minutes,
        randomize_questions=bool(quiz.randomize_questions),
        show_feedback_immediately=bool(quiz.show_feedback_immediately),
        max_attempts=quiz.max_attempts,
        questions=tuple(
            _build_question_definition(question, options_by_question.get(question.id, []))
            for question in ordered_questions
        ),
    )


async def load_quiz_definition(session: AsyncSession, *, quiz_id: int) -> QuizDefinition:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError
    questions = await QuizQuestionsRepo.list_for_quiz(session, quiz_id=quiz.id)
    options = await QuizQuestionsRepo.list_options_for_questions(
        session,
        question_ids=[question.id for question in questions],
    )
    return build_quiz_definition(quiz, questions=questions, options=options)
