"""In-memory accounts, quizzes and attempts backing the development API server."""

from __future__ import annotations

import hashlib
import random
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


class StoreError(Exception):
    """A request the store refuses; ``status`` is the HTTP status to answer with."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


@dataclass(slots=True)
class StoredOption:
    id: str
    text: str
    is_correct: bool


@dataclass(slots=True)
class StoredQuestion:
    id: str
    text: str
    options: list[StoredOption]
    explanation: str = ""


@dataclass(slots=True)
class StoredQuiz:
    id: str
    user_id: str
    title: str
    subject: str
    questions: list[StoredQuestion]
    description: str = ""
    difficulty: str = "medium"
    time_limit: int | None = None
    is_public: bool = False
    tags: list[str] = field(default_factory=list)
    attempts: int = 0
    created_at: str = ""


@dataclass(slots=True)
class Attempt:
    """Latest completed attempt of one user on one quiz."""

    score: float
    answers: dict[str, str]
    completion_time: int
    correct_answers: int
    completed_at: str


@dataclass(slots=True)
class StoredUser:
    id: str
    name: str
    email: str
    password_hash: str
    salt: str
    created_at: str
    last_login: str | None = None
    # quiz id -> every score this user submitted for it
    scores: dict[str, list[float]] = field(default_factory=dict)
    completion_times: list[int] = field(default_factory=list)


# (question, correct answer, distractors, explanation); ``{subject}`` is filled in.
_QUESTION_TEMPLATES: tuple[tuple[str, str, tuple[str, str, str], str], ...] = (
    (
        "Which approach is the most reliable way to build lasting knowledge of {subject}?",
        "Practising regularly with feedback on mistakes",
        ("Reading the glossary once", "Memorising answers without context", "Skipping the fundamentals"),
        "Spaced practice with feedback is how durable understanding of {subject} is built.",
    ),
    (
        "When learning {subject}, what should be mastered first?",
        "The core concepts and terminology",
        ("Rare edge cases", "Historical trivia", "Vendor-specific shortcuts"),
        "Advanced topics in {subject} build on its core concepts.",
    ),
    (
        "What is the best first step when a problem in {subject} seems too large?",
        "Break it into smaller, well-defined parts",
        ("Start over with a different topic", "Guess until something works", "Wait for it to resolve itself"),
        "Decomposition turns a large {subject} problem into tractable pieces.",
    ),
    (
        "Which habit most improves accuracy when answering {subject} questions?",
        "Checking each assumption against the definition",
        ("Answering as fast as possible", "Choosing the longest option", "Relying on the first instinct only"),
        "Verifying assumptions catches the most common mistakes in {subject}.",
    ),
    (
        "What is usually the best source for authoritative information about {subject}?",
        "Primary references and official documentation",
        ("Anonymous forum rumours", "Outdated lecture notes", "Unverified summaries"),
        "Primary sources are kept accurate and are the reference point for {subject}.",
    ),
    (
        "Why are worked examples valuable when studying {subject}?",
        "They show how principles apply to concrete cases",
        ("They replace the need to understand theory", "They are always shorter", "They never contain errors"),
        "Examples connect abstract {subject} principles to practice.",
    ),
)

_DIFFICULTY_PREFIX = {"easy": "", "medium": "", "hard": "(Advanced) "}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return secrets.token_hex(12)


def _hash_password(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), 100_000).hex()


def build_template_questions(subject: str, count: int, difficulty: str = "medium") -> list[StoredQuestion]:
    """Build ``count`` questions with exactly one correct option each.

    Option order is shuffled with a seed derived from the subject and position,
    so the same request always yields the same layout.
    """
    prefix = _DIFFICULTY_PREFIX.get(difficulty, "")
    questions: list[StoredQuestion] = []
    for position in range(count):
        text, correct, distractors, explanation = _QUESTION_TEMPLATES[position % len(_QUESTION_TEMPLATES)]
        round_number = position // len(_QUESTION_TEMPLATES)
        if round_number:
            text = f"{text} (part {round_number + 1})"
        options = [StoredOption(_new_id(), correct, True)] + [
            StoredOption(_new_id(), distractor, False) for distractor in distractors
        ]
        random.Random(f"{subject}:{position}").shuffle(options)
        questions.append(
            StoredQuestion(
                id=_new_id(),
                text=prefix + text.format(subject=subject),
                options=options,
                explanation=explanation.format(subject=subject),
            )
        )
    return questions


class DevStore:
    """Thread-safe in-memory state; uvicorn serves requests from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: dict[str, StoredUser] = {}
        self.tokens: dict[str, str] = {}  # token -> user id
        self.quizzes: dict[str, StoredQuiz] = {}
        self.attempts: dict[tuple[str, str], Attempt] = {}  # (user id, quiz id)

    # --- Accounts ---

    def register(self, name: str, email: str, password: str) -> tuple[str, StoredUser]:
        email_key = email.strip().lower()
        with self._lock:
            if any(user.email == email_key for user in self.users.values()):
                raise StoreError(400, "User already exists")
            salt = secrets.token_hex(8)
            user = StoredUser(
                id=_new_id(),
                name=name.strip(),
                email=email_key,
                password_hash=_hash_password(password, salt),
                salt=salt,
                created_at=_now_iso(),
            )
            self.users[user.id] = user
            return self._issue_token(user), user

    def login(self, email: str, password: str) -> tuple[str, StoredUser]:
        email_key = email.strip().lower()
        with self._lock:
            user = next((u for u in self.users.values() if u.email == email_key), None)
            if user is None or _hash_password(password, user.salt) != user.password_hash:
                raise StoreError(401, "Invalid email or password")
            user.last_login = _now_iso()
            return self._issue_token(user), user

    def user_for_token(self, token: str | None) -> StoredUser:
        with self._lock:
            user_id = self.tokens.get(token or "")
            user = self.users.get(user_id) if user_id else None
            if user is None:
                raise StoreError(401, "Not authorized, token failed")
            return user

    def update_profile(
        self,
        user: StoredUser,
        name: str | None,
        email: str | None,
        current_password: str | None,
        new_password: str | None,
    ) -> StoredUser:
        with self._lock:
            if email:
                email_key = email.strip().lower()
                if any(u.email == email_key and u.id != user.id for u in self.users.values()):
                    raise StoreError(400, "Email is already in use")
                user.email = email_key
            if name:
                user.name = name.strip()
            if new_password:
                if not current_password or _hash_password(current_password, user.salt) != user.password_hash:
                    raise StoreError(400, "Current password is incorrect")
                user.password_hash = _hash_password(new_password, user.salt)
            return user

    def delete_account(self, user: StoredUser) -> None:
        with self._lock:
            self.users.pop(user.id, None)
            self.tokens = {token: uid for token, uid in self.tokens.items() if uid != user.id}
            for quiz_id in [qid for qid, quiz in self.quizzes.items() if quiz.user_id == user.id]:
                self.quizzes.pop(quiz_id)
            self.attempts = {key: value for key, value in self.attempts.items() if key[0] != user.id}

    def _issue_token(self, user: StoredUser) -> str:
        token = secrets.token_urlsafe(24)
        self.tokens[token] = user.id
        return token

    # --- Quizzes ---

    def create_quiz(
        self,
        user: StoredUser,
        title: str | None,
        subject: str,
        num_questions: int,
        difficulty: str | None,
        description: str | None = None,
        time_limit: int | None = None,
    ) -> StoredQuiz:
        level = difficulty or "medium"
        quiz = StoredQuiz(
            id=_new_id(),
            user_id=user.id,
            title=(title or "").strip() or f"{subject} Quiz",
            subject=subject,
            description=description or f"A {level} quiz about {subject}.",
            difficulty=level,
            time_limit=time_limit,
            questions=build_template_questions(subject, num_questions, level),
            created_at=_now_iso(),
        )
        with self._lock:
            self.quizzes[quiz.id] = quiz
        return quiz

    def get_quiz(self, user: StoredUser, quiz_id: str) -> StoredQuiz:
        with self._lock:
            quiz = self.quizzes.get(quiz_id)
            if quiz is None or (quiz.user_id != user.id and not quiz.is_public):
                raise StoreError(404, "Quiz not found")
            return quiz

    def owned_quiz(self, user: StoredUser, quiz_id: str) -> StoredQuiz:
        quiz = self.get_quiz(user, quiz_id)
        if quiz.user_id != user.id:
            raise StoreError(403, "Not authorized to modify this quiz")
        return quiz

    def delete_quiz(self, user: StoredUser, quiz_id: str) -> None:
        with self._lock:
            self.owned_quiz(user, quiz_id)
            self.quizzes.pop(quiz_id)
            self.attempts = {key: value for key, value in self.attempts.items() if key[1] != quiz_id}

    def user_quizzes(self, user: StoredUser) -> list[StoredQuiz]:
        with self._lock:
            return [quiz for quiz in self.quizzes.values() if quiz.user_id == user.id]

    def attempt_for(self, user: StoredUser, quiz_id: str) -> Attempt | None:
        return self.attempts.get((user.id, quiz_id))

    def submit(
        self,
        user: StoredUser,
        quiz_id: str,
        answers: list[str],
        completion_time: int,
        retake: bool,
    ) -> tuple[StoredQuiz, Attempt]:
        """Score a submission; only a retake may replace an earlier attempt."""
        with self._lock:
            quiz = self.get_quiz(user, quiz_id)
            if self.attempt_for(user, quiz_id) is not None and not retake:
                raise StoreError(400, "Quiz already completed")
            chosen: dict[str, str] = {}
            correct = 0
            for question, option_id in zip(quiz.questions, answers):
                chosen[question.id] = option_id
                if any(option.id == option_id and option.is_correct for option in question.options):
                    correct += 1
            total = len(quiz.questions)
            score = round(correct / total * 100, 2) if total else 0.0
            attempt = Attempt(
                score=score,
                answers=chosen,
                completion_time=completion_time,
                correct_answers=correct,
                completed_at=_now_iso(),
            )
            self.attempts[(user.id, quiz_id)] = attempt
            quiz.attempts += 1
            user.scores.setdefault(quiz_id, []).append(score)
            user.completion_times.append(completion_time)
            return quiz, attempt

    # --- Statistics ---

    def user_stats(self, user: StoredUser) -> dict[str, Any]:
        with self._lock:
            all_scores = [score for scores in user.scores.values() for score in scores]
            times = user.completion_times
            return {
                "quizzesTaken": len(all_scores),
                "averageScore": round(sum(all_scores) / len(all_scores), 2) if all_scores else 0,
                "totalScore": round(sum(all_scores), 2),
                "quizzesCreated": len(self.user_quizzes(user)),
                "averageCompletionTime": round(sum(times) / len(times)) if times else None,
            }

    def leaderboard(self) -> list[dict[str, Any]]:
        """Users with at least one submission, best average score first."""
        with self._lock:
            rows = []
            for user in self.users.values():
                stats = self.user_stats(user)
                if not stats["quizzesTaken"]:
                    continue
                rows.append(
                    {
                        "_id": user.id,
                        "userName": user.name,
                        "userImage": None,
                        "quizCount": stats["quizzesTaken"],
                        "totalScore": stats["totalScore"],
                        "averageScore": stats["averageScore"],
                        "avgCompletionTime": stats["averageCompletionTime"],
                    }
                )
            rows.sort(key=lambda row: row["averageScore"], reverse=True)
            return rows
