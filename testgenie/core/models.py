"""Domain models for the quiz client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Option:
    """Answer option; ``is_correct`` is None while correctness is still hidden."""

    id: str
    text: str
    is_correct: bool | None = None


@dataclass(slots=True)
class Question:
    """Multiple-choice question with its ordered options."""

    id: str
    text: str
    options: list[Option]
    explanation: str = ""

    def correct_option_index(self) -> int | None:
        return next((i for i, option in enumerate(self.options) if option.is_correct), None)


@dataclass(slots=True)
class Quiz:
    """Client-side copy of a quiz owned by the backend."""

    id: str
    title: str
    subject: str
    questions: list[Question] = field(default_factory=list)
    description: str = ""
    user_id: str = ""
    created_at: str = ""
    is_completed: bool = False
    score: float | None = None
    user_answers: dict[str, str] | None = None  # question id -> option id
    time_limit: int | None = None  # minutes
    completion_time: int | None = None  # seconds
    is_public: bool = False
    tags: list[str] = field(default_factory=list)
    attempts: int = 0
    question_count: int = 0  # listings send a count instead of questions

    @property
    def total_questions(self) -> int:
        return len(self.questions) if self.questions else self.question_count


@dataclass(slots=True)
class SubmissionResult:
    """Server-scored outcome of a quiz submission.

    ``quiz`` is None when the server accepted the answers without echoing the quiz.
    """

    quiz: Quiz | None
    score: float | None
    correct_answers: int
    total_questions: int
    time_taken: int
    feedback: str


@dataclass(slots=True)
class User:
    """Authenticated account as returned by the API."""

    id: str
    name: str
    email: str
    image_url: str | None = None
    role: str = "user"
    quizzes_taken: int = 0
    average_score: float = 0.0
    total_score: float = 0.0
    average_completion_time: float | None = None
    created_at: str = ""
    last_login: str | None = None


@dataclass(slots=True)
class UserStats:
    quizzes_taken: int = 0
    average_score: float = 0.0
    total_score: float = 0.0
    quizzes_created: int = 0
    average_completion_time: float | None = None


@dataclass(slots=True)
class LeaderboardEntry:
    """Raw leaderboard row in server order."""

    id: str
    user_name: str
    quiz_count: int
    total_score: float
    average_score: float
    user_image: str | None = None
    avg_completion_time: float | None = None


@dataclass(slots=True)
class RankedUser:
    """Leaderboard row prepared for display."""

    id: str
    name: str
    score: float
    quizzes_taken: int
    avg_completion_time: float
    rank: int
    image_url: str | None = None
