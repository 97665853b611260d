from __future__ import annotations

from .attempts_queries import get_attempt_result, get_quiz_for_taking, list_attempts
from .attempts_start import start_attempt
from .attempts_submit import load_owned_attempt, resolve_submitted_answers, submit_answers
from .projection import build_history_entry, build_result_view, build_take_view
from .quiz_loading import build_quiz_definition, load_quiz_definition


class QuizAttemptService:
    load_quiz_definition = staticmethod(load_quiz_definition)
    get_quiz_for_taking = staticmethod(get_quiz_for_taking)
    start_attempt = staticmethod(start_attempt)
    submit_answers = staticmethod(submit_answers)
    get_attempt_result = staticmethod(get_attempt_result)
    list_attempts = staticmethod(list_attempts)


__all__ = [
    "QuizAttemptService",
    "build_history_entry",
    "build_quiz_definition",
    "build_result_view",
    "build_take_view",
    "get_attempt_result",
    "get_quiz_for_taking",
    "list_attempts",
    "load_owned_attempt",
    "load_quiz_definition",
    "resolve_submitted_answers",
    "start_attempt",
    "submit_answers",
]
