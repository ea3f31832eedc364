"""Small fakes shared by the test modules."""

from __future__ import annotations

import json as jsonlib
from typing import Any

import requests

from testgenie.core.models import Option, Question, Quiz, SubmissionResult
from testgenie.core.notifications import Notifier
from testgenie.core.routes import Route


def two_question_payload(completed: bool = False, **overrides: Any) -> dict[str, Any]:
    """Wire payload: option A is correct for q1, option B for q2."""
    payload: dict[str, Any] = {
        "_id": "quiz-1",
        "title": "Networks",
        "subject": "Computer Networks",
        "isCompleted": completed,
        "attempts": 1 if completed else 0,
        "questions": [
            {
                "_id": "q1",
                "text": "Which layer routes packets?",
                "explanation": "Routing happens at the network layer.",
                "options": [
                    {"_id": "q1-a", "text": "Network", "isCorrect": True},
                    {"_id": "q1-b", "text": "Physical", "isCorrect": False},
                ],
            },
            {
                "_id": "q2",
                "text": "Which protocol is connectionless?",
                "options": [
                    {"_id": "q2-a", "text": "TCP", "isCorrect": False},
                    {"_id": "q2-b", "text": "UDP", "isCorrect": True},
                ],
            },
        ],
    }
    if completed:
        payload.update(score=50.0, userAnswers={"q1": "q1-b", "q2": "q2-b"}, completionTime=42)
    payload.update(overrides)
    return payload


def make_quiz(question_count: int = 2, option_count: int = 2, **fields: Any) -> Quiz:
    questions = [
        Question(
            id=f"q{q}",
            text=f"Question {q}",
            options=[
                Option(id=f"q{q}-o{o}", text=f"Option {o}", is_correct=None)
                for o in range(option_count)
            ],
        )
        for q in range(1, question_count + 1)
    ]
    return Quiz(id=fields.pop("id", "quiz-1"), title="Quiz", subject="General", questions=questions, **fields)


class ManualClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_kind(self, kind: str) -> list[str]:
        return [message for level, message in self.messages if level == kind]


class RecordingNavigator:
    def __init__(self) -> None:
        self.routes: list[Route] = []

    def __call__(self, route: Route) -> None:
        self.routes.append(route)

    @property
    def last(self) -> Route | None:
        return self.routes[-1] if self.routes else None


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else jsonlib.dumps(body).encode("utf-8")

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeHttp:
    """Stands in for ``requests.Session``; queued items are responses or exceptions."""

    def __init__(self, *queued: Any) -> None:
        self.queue = list(queued)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


class FakeQuizApi:
    """Minimal API double for the take-quiz controller."""

    def __init__(self, quiz: Quiz | Exception | None = None) -> None:
        self.quiz = quiz
        self.submit_result: SubmissionResult | Exception | None = None
        self.submissions: list[dict[str, Any]] = []
        self.fetches: list[str] = []

    def get_quiz(self, quiz_id: str) -> Quiz:
        self.fetches.append(quiz_id)
        if isinstance(self.quiz, Exception):
            raise self.quiz
        assert self.quiz is not None
        return self.quiz

    def submit_quiz(
        self, quiz_id: str, answers: list[str], completion_time: int, retake: bool = False
    ) -> SubmissionResult:
        self.submissions.append(
            {"quiz_id": quiz_id, "answers": answers, "completion_time": completion_time, "retake": retake}
        )
        if isinstance(self.submit_result, Exception):
            raise self.submit_result
        assert self.submit_result is not None
        return self.submit_result


CONNECTION_ERROR = requests.ConnectionError("connection refused")
