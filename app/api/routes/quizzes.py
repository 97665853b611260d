from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, HTTPException, Request

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.quizzes.errors import (
    AnswerOptionNotFoundError,
    AttemptAccessError,
    AttemptAlreadySubmittedError,
    AttemptNotCompletedError,
    AttemptNotFoundError,
    AttemptStartConflictError,
    DuplicateAnswerError,
    MaxAttemptsReachedError,
    QuestionNotInQuizError,
    QuizEngineError,
    QuizNotFoundError,
)
from app.quizzes.service import QuizAttemptService
from app.quizzes.types import (
    AnswerSubmission,
    AttemptHistoryEntry,
    AttemptResultView,
    QuizTakeView,
)
from app.services.caller_identity import extract_caller_user_id

from .quizzes_models import (
    AnswerOptionTakeResponse,
    AttemptHistoryResponse,
    AttemptResultResponse,
    AttemptStartResponse,
    QuestionResultResponse,
    QuestionTakeResponse,
    QuizTakeResponse,
    SubmitAnswersRequest,
)

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES: tuple[tuple[type[QuizEngineError], int, str], ...] = (
    (QuizNotFoundError, 404, "E_QUIZ_NOT_FOUND"),
    (AttemptNotFoundError, 404, "E_ATTEMPT_NOT_FOUND"),
    (AnswerOptionNotFoundError, 404, "E_OPTION_NOT_FOUND"),
    (AttemptAccessError, 403, "E_FORBIDDEN"),
    (MaxAttemptsReachedError, 409, "E_MAX_ATTEMPTS_REACHED"),
    (AttemptStartConflictError, 409, "E_ATTEMPT_START_CONFLICT"),
    (AttemptAlreadySubmittedError, 409, "E_ATTEMPT_ALREADY_SUBMITTED"),
    (AttemptNotCompletedError, 409, "E_ATTEMPT_NOT_COMPLETED"),
    (QuestionNotInQuizError, 422, "E_QUESTION_NOT_IN_QUIZ"),
    (DuplicateAnswerError, 422, "E_DUPLICATE_ANSWER"),
)


def _to_http_error(exc: QuizEngineError) -> HTTPException:
    for error_type, status_code, code in _ERROR_RESPONSES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail={"code": code})
    return HTTPException(status_code=400, detail={"code": "E_QUIZ_REQUEST_INVALID"})


def _require_caller(request: Request) -> int:
    user_id = extract_caller_user_id(request, header_name=get_settings().user_id_header)
    if user_id is None:
        logger.warning("quiz_api_caller_missing", path=request.url.path)
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHENTICATED"})
    return user_id


def _take_as_response(view: QuizTakeView) -> QuizTakeResponse:
    return QuizTakeResponse(
        id=view.quiz_id,
        title=view.title,
        description=view.description,
        passing_score=view.passing_score,
        time_limit_minutes=view.time_limit_minutes,
        randomize_questions=view.randomize_questions,
        max_attempts=view.max_attempts,
        attempt_count=view.attempt_count,
        can_attempt=view.can_attempt,
        best_score=view.best_score,
        has_passed=view.has_passed,
        questions=[
            QuestionTakeResponse(
                id=question.question_id,
                question_type=question.question_type.value,
                question_text=question.text,
                points=question.points,
                answer_options=[
                    AnswerOptionTakeResponse(id=option.option_id, option_text=option.text)
                    for option in question.options
                ],
            )
            for question in view.questions
        ],
    )


def _result_as_response(view: AttemptResultView) -> AttemptResultResponse:
    return AttemptResultResponse(
        attempt_id=view.attempt_id,
        quiz_id=view.quiz_id,
        score=view.score,
        passed=view.passed,
        time_spent_seconds=view.time_spent_seconds,
        completed_at=view.completed_at,
        question_results=[
            QuestionResultResponse(
                question_id=item.question_id,
                question_text=item.text,
                question_type=item.question_type.value,
                is_correct=item.is_correct,
                points_earned=item.points_earned,
                points_possible=item.points_possible,
                explanation=item.explanation,
                selected_option_id=item.selected_option_id,
                selected_option_ids=item.selected_option_ids,
                selected_option_text=item.selected_option_text,
                text_answer=item.text_answer,
                pending_review=item.pending_review,
                correct_option_texts=item.correct_option_texts,
                acceptable_answers=item.acceptable_answers,
            )
            for item in view.question_results
        ],
    )


def _history_as_response(entry: AttemptHistoryEntry) -> AttemptHistoryResponse:
    return AttemptHistoryResponse(
        id=entry.attempt_id,
        attempt_number=entry.attempt_number,
        score=entry.score,
        passed=entry.passed,
        started_at=entry.started_at,
        completed_at=entry.completed_at,
        time_spent_seconds=entry.time_spent_seconds,
    )


@router.get("/{quiz_id}/take", response_model=QuizTakeResponse)
async def get_quiz_for_taking(quiz_id: int, request: Request) -> QuizTakeResponse:
    user_id = _require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await QuizAttemptService.get_quiz_for_taking(
                session,
                quiz_id=quiz_id,
                user_id=user_id,
            )
    except QuizEngineError as exc:
        raise _to_http_error(exc) from exc
    return _take_as_response(view)


@router.post("/{quiz_id}/start", response_model=AttemptStartResponse)
async def start_quiz_attempt(quiz_id: int, request: Request) -> AttemptStartResponse:
    user_id = _require_caller(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await QuizAttemptService.start_attempt(
                session,
                quiz_id=quiz_id,
                user_id=user_id,
                now_utc=now_utc,
            )
    except QuizEngineError as exc:
        raise _to_http_error(exc) from exc
    return AttemptStartResponse(
        attempt_id=result.attempt_id,
        attempt_number=result.attempt_number,
        started_at=result.started_at,
        time_limit_minutes=result.time_limit_minutes,
    )


@router.post("/attempts/{attempt_id}/submit", response_model=AttemptResultResponse)
async def submit_quiz_answers(
    attempt_id: int,
    payload: SubmitAnswersRequest,
    request: Request,
) -> AttemptResultResponse:
    user_id = _require_caller(request)
    submissions = [
        AnswerSubmission(
            question_id=answer.question_id,
            selected_option_id=answer.selected_option_id,
            selected_option_ids=(
                tuple(answer.selected_option_ids) if answer.selected_option_ids is not None else None
            ),
            text_answer=answer.text_answer,
        )
        for answer in payload.answers
    ]
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            view = await QuizAttemptService.submit_answers(
                session,
                attempt_id=attempt_id,
                user_id=user_id,
                answers=submissions,
                now_utc=now_utc,
            )
    except QuizEngineError as exc:
        raise _to_http_error(exc) from exc
    return _result_as_response(view)


@router.get("/attempts/{attempt_id}/result", response_model=AttemptResultResponse)
async def get_attempt_result(attempt_id: int, request: Request) -> AttemptResultResponse:
    user_id = _require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await QuizAttemptService.get_attempt_result(
                session,
                attempt_id=attempt_id,
                user_id=user_id,
            )
    except QuizEngineError as exc:
        raise _to_http_error(exc) from exc
    return _result_as_response(view)


@router.get("/{quiz_id}/attempts", response_model=list[AttemptHistoryResponse])
async def list_quiz_attempts(quiz_id: int, request: Request) -> list[AttemptHistoryResponse]:
    user_id = _require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            history = await QuizAttemptService.list_attempts(
                session,
                quiz_id=quiz_id,
                user_id=user_id,
            )
    except QuizEngineError as exc:
        raise _to_http_error(exc) from exc
    return [_history_as_response(entry) for entry in history]
