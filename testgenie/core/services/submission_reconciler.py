"""Mapping between local option indices and the identifier-based wire format."""

from __future__ import annotations

from testgenie.constants.quiz_constants import ALREADY_COMPLETED_MARKER, UNANSWERED
from testgenie.core.errors import ApiError
from testgenie.core.models import Quiz


def build_answer_ids(quiz: Quiz, selections: list[int]) -> list[str]:
    """Return one option id per question, in question order.

    Unanswered slots, out-of-range indices and options without an id all map
    to an empty string so a submission is never blocked here.
    """
    answers: list[str] = []
    for idx, question in enumerate(quiz.questions):
        selection = selections[idx] if idx < len(selections) else UNANSWERED
        if selection == UNANSWERED or not 0 <= selection < len(question.options):
            answers.append("")
            continue
        answers.append(question.options[selection].id or "")
    return answers


def is_already_completed(error: ApiError) -> bool:
    """True for the 400 the server sends when a quiz was already submitted."""
    return error.status == 400 and ALREADY_COMPLETED_MARKER in (error.message or "").lower()


def prepare_retake(quiz: Quiz) -> Quiz:
    """Clear completion data on a fetched quiz regardless of the server's values."""
    quiz.is_completed = False
    quiz.score = None
    quiz.user_answers = None
    quiz.completion_time = None
    return quiz
