"""Aggregates shown at the top of the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from testgenie.core.models import Quiz


@dataclass(slots=True)
class QuizSummary:
    quiz_count: int = 0
    total_attempts: int = 0
    total_questions: int = 0
    average_completion_time: float | None = None  # seconds, completed quizzes only


def summarize_quizzes(quizzes: Sequence[Quiz]) -> QuizSummary:
    times = [quiz.completion_time for quiz in quizzes if quiz.is_completed and quiz.completion_time]
    return QuizSummary(
        quiz_count=len(quizzes),
        total_attempts=sum(quiz.attempts or 0 for quiz in quizzes),
        total_questions=sum(quiz.total_questions for quiz in quizzes),
        average_completion_time=sum(times) / len(times) if times else None,
    )


def attempted_quizzes(quizzes: Sequence[Quiz]) -> list[Quiz]:
    """Quizzes the user has completed or tried at least once."""
    return [quiz for quiz in quizzes if quiz.is_completed or quiz.attempts > 0]
