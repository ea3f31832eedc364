from __future__ import annotations

from fakes import make_quiz
from testgenie.core.services.quiz_summary import attempted_quizzes, summarize_quizzes


def test_summary_of_no_quizzes():
    summary = summarize_quizzes([])

    assert summary.quiz_count == 0
    assert summary.total_attempts == 0
    assert summary.average_completion_time is None


def test_summary_averages_completed_times_only():
    quizzes = [
        make_quiz(id="a", is_completed=True, completion_time=30, attempts=2),
        make_quiz(id="b", is_completed=True, completion_time=90, attempts=1),
        make_quiz(id="c", completion_time=500),
        make_quiz(id="d", question_count=3),
    ]

    summary = summarize_quizzes(quizzes)

    assert summary.quiz_count == 4
    assert summary.total_attempts == 3
    assert summary.total_questions == 9
    assert summary.average_completion_time == 60


def test_attempted_filter():
    quizzes = [
        make_quiz(id="fresh"),
        make_quiz(id="done", is_completed=True),
        make_quiz(id="tried", attempts=1),
    ]

    assert [q.id for q in attempted_quizzes(quizzes)] == ["done", "tried"]
