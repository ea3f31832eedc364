"""Quiz-related constants shared across UI and core layers."""

UNANSWERED: int = -1
TIMER_TICK_INTERVAL_MS: int = 1000

QUESTION_COUNT_CHOICES: tuple[int, ...] = (5, 10, 15, 20, 25, 30)
DEFAULT_QUESTION_COUNT: int = 10
DIFFICULTY_LEVELS: tuple[str, ...] = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY: str = "medium"
PREDEFINED_SUBJECTS: tuple[str, ...] = (
    "Programming Languages",
    "Data Structures & Algorithms",
    "Database Systems",
    "Web Development",
    "Computer Networks",
)

LEADERBOARD_PAGE_SIZE: int = 10
SCORE_GOOD_THRESHOLD: float = 70.0
SCORE_FAIR_THRESHOLD: float = 40.0

MIN_PASSWORD_LENGTH: int = 6
ALREADY_COMPLETED_MARKER: str = "already completed"
AI_FALLBACK_MARKERS: tuple[str, ...] = ("quota", "limit")
DELETE_ACCOUNT_CONFIRMATION: str = "DELETE"
