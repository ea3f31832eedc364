"""Conversion of API JSON payloads into domain models.

Payload shapes follow the backend's camelCase wire format:

    {
      "_id": "...", "title": "...", "subject": "...",
      "questions": [
        {"_id": "...", "text": "...", "explanation": "...",
         "options": [{"_id": "...", "text": "...", "isCorrect": true}, ...]}
      ],
      "isCompleted": false, "score": 80, "userAnswers": {"<qid>": "<oid>"},
      "completionTime": 95, "attempts": 2
    }

Quiz payloads meant for taking are validated strictly (``LoadError``); list
endpoints and user payloads are parsed leniently since nothing is answered
against them.
"""

from __future__ import annotations

import secrets
from typing import Any, Mapping

from testgenie.core.errors import LoadError, SubmissionError
from testgenie.core.models import (
    LeaderboardEntry,
    Option,
    Question,
    Quiz,
    SubmissionResult,
    User,
    UserStats,
)

_DEFAULT_FEEDBACK = "Quiz completed successfully!"


def parse_quiz_for_taking(payload: Any) -> Quiz:
    """Validate a ``GET /quiz/{id}`` payload.

    Correctness flags survive only when the payload itself says the quiz is
    completed; otherwise every option's ``is_correct`` is forced to None.
    """
    if not isinstance(payload, Mapping) or not payload:
        raise LoadError("No quiz data received")
    if not payload.get("_id"):
        raise LoadError("Invalid quiz data structure")
    raw_questions = payload.get("questions")
    if not isinstance(raw_questions, list):
        raise LoadError("Invalid quiz data received")

    reveal = bool(payload.get("isCompleted"))
    questions = [_parse_question(raw, reveal) for raw in raw_questions]
    return _build_quiz(payload, questions)


def parse_quiz_listing(payload: Any) -> list[Quiz]:
    """Parse list endpoints where ``questions`` may be a plain count."""
    if not isinstance(payload, list):
        return []
    quizzes: list[Quiz] = []
    for raw in payload:
        if not isinstance(raw, Mapping) or not raw.get("_id"):
            continue
        raw_questions = raw.get("questions")
        questions: list[Question] = []
        count = 0
        if isinstance(raw_questions, list):
            questions = [
                _parse_question(q, bool(raw.get("isCompleted")))
                for q in raw_questions
                if isinstance(q, Mapping) and isinstance(q.get("options"), list)
            ]
            count = len(raw_questions)
        elif isinstance(raw_questions, int):
            count = raw_questions
        quiz = _build_quiz(raw, questions)
        quiz.question_count = count
        quizzes.append(quiz)
    return quizzes


def parse_submission_result(
    payload: Any, local_completion_time: int, quiz_id: str = ""
) -> SubmissionResult:
    """Parse a submit response, falling back to local values for optional fields.

    A 2xx response without ``quiz`` still means the server accepted the
    answers; the result then carries ``quiz=None`` and whatever score was sent.
    Malformed values raise ``SubmissionError``.
    """
    if not isinstance(payload, Mapping):
        raise SubmissionError("Invalid response from server")
    try:
        quiz = None
        score = payload.get("score")
        if payload.get("quiz") is not None:
            quiz = _parse_scored_quiz(payload["quiz"], quiz_id)
            if score is None:
                score = quiz.score if quiz.score is not None else 0.0
        total = payload.get("totalQuestions")
        if total is None:
            total = len(quiz.questions) if quiz is not None else 0
        return SubmissionResult(
            quiz=quiz,
            score=float(score) if score is not None else None,
            correct_answers=int(payload.get("correctAnswers") or 0),
            total_questions=int(total),
            time_taken=int(payload.get("timeTaken") or local_completion_time),
            feedback=payload.get("feedback") or _DEFAULT_FEEDBACK,
        )
    except (TypeError, ValueError) as exc:
        raise SubmissionError("Invalid response from server") from exc


def _parse_scored_quiz(raw_quiz: Any, quiz_id: str) -> Quiz:
    if not isinstance(raw_quiz, Mapping) or not isinstance(raw_quiz.get("questions"), list):
        raise SubmissionError("Invalid response from server")
    raw_quiz = {**raw_quiz, "_id": raw_quiz.get("_id") or quiz_id}
    if not raw_quiz["_id"]:
        raise SubmissionError("Invalid response from server")
    try:
        questions = [_parse_question(raw, reveal=True) for raw in raw_quiz["questions"]]
    except LoadError as exc:
        raise SubmissionError(str(exc)) from exc
    return _build_quiz(raw_quiz, questions)


def parse_user(payload: Any) -> User:
    if not isinstance(payload, Mapping):
        raise ValueError("User payload must be an object.")
    return User(
        id=str(payload.get("_id", "")),
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        image_url=payload.get("imageUrl"),
        role=payload.get("role") or "user",
        quizzes_taken=int(payload.get("quizzesTaken") or 0),
        average_score=float(payload.get("averageScore") or 0),
        total_score=float(payload.get("totalScore") or 0),
        average_completion_time=payload.get("averageCompletionTime"),
        created_at=payload.get("createdAt") or "",
        last_login=payload.get("lastLogin"),
    )


def user_to_payload(user: User) -> dict[str, Any]:
    """Inverse of :func:`parse_user`, used for the persisted session file."""
    return {
        "_id": user.id,
        "name": user.name,
        "email": user.email,
        "imageUrl": user.image_url,
        "role": user.role,
        "quizzesTaken": user.quizzes_taken,
        "averageScore": user.average_score,
        "totalScore": user.total_score,
        "averageCompletionTime": user.average_completion_time,
        "createdAt": user.created_at,
        "lastLogin": user.last_login,
    }


def parse_user_stats(payload: Any) -> UserStats:
    if not isinstance(payload, Mapping):
        return UserStats()
    return UserStats(
        quizzes_taken=int(payload.get("quizzesTaken") or 0),
        average_score=float(payload.get("averageScore") or 0),
        total_score=float(payload.get("totalScore") or 0),
        quizzes_created=int(payload.get("quizzesCreated") or 0),
        average_completion_time=payload.get("averageCompletionTime"),
    )


def parse_leaderboard(payload: Any) -> list[LeaderboardEntry]:
    if not isinstance(payload, list):
        return []
    entries: list[LeaderboardEntry] = []
    for raw in payload:
        if not isinstance(raw, Mapping):
            continue
        entries.append(
            LeaderboardEntry(
                id=str(raw.get("_id") or raw.get("userId") or ""),
                user_name=raw.get("userName") or "Anonymous",
                user_image=raw.get("userImage"),
                quiz_count=int(raw.get("quizCount") or 0),
                total_score=float(raw.get("totalScore") or 0),
                average_score=float(raw.get("averageScore") or 0),
                avg_completion_time=raw.get("avgCompletionTime"),
            )
        )
    return entries


def _parse_question(raw: Any, reveal: bool) -> Question:
    if not isinstance(raw, Mapping):
        raise LoadError("Invalid question data")
    raw_options = raw.get("options")
    if not isinstance(raw_options, list):
        raise LoadError("Invalid question options")
    options = [_parse_option(option, reveal) for option in raw_options]
    return Question(
        id=str(raw.get("_id") or _fallback_id()),
        text=raw.get("text") or "Invalid question",
        options=options,
        explanation=raw.get("explanation") or "",
    )


def _parse_option(raw: Any, reveal: bool) -> Option:
    if not isinstance(raw, Mapping):
        raise LoadError("Invalid question options")
    is_correct = bool(raw.get("isCorrect")) if reveal else None
    return Option(
        id=str(raw.get("_id") or ""),
        text=raw.get("text") or "Invalid option",
        is_correct=is_correct,
    )


def _build_quiz(payload: Mapping[str, Any], questions: list[Question]) -> Quiz:
    user_answers = payload.get("userAnswers")
    return Quiz(
        id=str(payload["_id"]),
        title=payload.get("title") or "Untitled Quiz",
        subject=payload.get("subject") or "General",
        description=payload.get("description") or "",
        questions=questions,
        user_id=str(payload.get("userId") or ""),
        created_at=payload.get("createdAt") or "",
        is_completed=bool(payload.get("isCompleted")),
        score=payload.get("score"),
        user_answers=dict(user_answers) if isinstance(user_answers, Mapping) else None,
        time_limit=payload.get("timeLimit"),
        completion_time=payload.get("completionTime"),
        is_public=bool(payload.get("isPublic")),
        tags=list(payload.get("tags") or []),
        attempts=int(payload.get("attempts") or 0),
        question_count=len(questions),
    )


def _fallback_id() -> str:
    return secrets.token_hex(4)
