"""HTTP client for the remote quiz API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from testgenie.constants.network_constants import DEFAULT_API_URL, REQUEST_TIMEOUT_SECONDS
from testgenie.core.auth_session import AuthSession
from testgenie.core.errors import (
    AlreadyCompletedRace,
    ApiError,
    NetworkError,
    NotFoundError,
    SubmissionError,
    UnauthorizedError,
)
from testgenie.core.models import LeaderboardEntry, Quiz, SubmissionResult, User, UserStats
from testgenie.core.quiz_parser import (
    parse_leaderboard,
    parse_quiz_for_taking,
    parse_quiz_listing,
    parse_submission_result,
    parse_user,
    parse_user_stats,
)
from testgenie.core.schemas import (
    LoginPayload,
    PasswordResetPayload,
    ProfileUpdatePayload,
    QuizSettings,
    RegisterPayload,
    SubmitPayload,
)
from testgenie.core.services.submission_reconciler import is_already_completed

logger = logging.getLogger(__name__)

# Credential endpoints report bad passwords as 401; those must not expire the session.
_CREDENTIAL_PATHS = ("/auth/login", "/auth/register")


class QuizApiClient:
    """Thin wrapper over ``requests`` that speaks the quiz API's JSON contract."""

    def __init__(
        self,
        auth_session: AuthSession,
        base_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        http: requests.Session | None = None,
    ) -> None:
        self.auth_session = auth_session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or requests.Session()

    # --- Auth ---

    def register(self, name: str, email: str, password: str) -> tuple[str, User]:
        payload = RegisterPayload(name=name, email=email, password=password)
        data = self._unwrap(self._request("POST", "/auth/register", json=payload.to_wire()))
        return data["token"], parse_user(data["user"])

    def login(self, email: str, password: str) -> tuple[str, User]:
        payload = LoginPayload(email=email, password=password)
        data = self._unwrap(self._request("POST", "/auth/login", json=payload.to_wire()))
        return data["token"], parse_user(data["user"])

    def get_current_user(self) -> User:
        return parse_user(self._unwrap(self._request("GET", "/auth/me")))

    def get_user_stats(self) -> UserStats:
        return parse_user_stats(self._unwrap(self._request("GET", "/auth/stats")))

    def request_password_reset(self, email: str) -> str:
        data = self._request(
            "POST", "/auth/forgot-password", json=PasswordResetPayload(email=email).to_wire()
        )
        return (data or {}).get("message") or "Password reset instructions sent."

    def update_profile(self, update: ProfileUpdatePayload) -> User:
        return parse_user(self._unwrap(self._request("PUT", "/user/profile", json=update.to_wire())))

    def delete_account(self) -> None:
        self._request("DELETE", "/user/account")

    # --- Quizzes ---

    def generate_quiz(self, settings: QuizSettings) -> Quiz:
        return self._parse_created_quiz(self._request("POST", "/quiz/generate", json=settings.to_wire()))

    def generate_basic_quiz(self, settings: QuizSettings) -> Quiz:
        return self._parse_created_quiz(
            self._request("POST", "/quiz/generate-basic", json=settings.to_wire())
        )

    def get_quiz(self, quiz_id: str) -> Quiz:
        """Fetch a quiz for taking; raises ``LoadError`` on malformed payloads."""
        try:
            data = self._request("GET", f"/quiz/{quiz_id}")
        except NotFoundError as exc:
            raise NotFoundError(exc.status, "Quiz not found") from exc
        return parse_quiz_for_taking(self._unwrap(data))

    def delete_quiz(self, quiz_id: str) -> None:
        self._request("DELETE", f"/quiz/{quiz_id}")

    def submit_quiz(
        self, quiz_id: str, answers: list[str], completion_time: int, retake: bool = False
    ) -> SubmissionResult:
        """Submit answers; a 400 saying the quiz is already completed becomes ``AlreadyCompletedRace``."""
        payload = SubmitPayload(answers=answers, completion_time=completion_time)
        params = {"retake": "true"} if retake else None
        try:
            data = self._request(
                "POST", f"/quiz/{quiz_id}/submit", json=payload.to_wire(), params=params
            )
        except UnauthorizedError:
            raise
        except ApiError as exc:
            if is_already_completed(exc):
                raise AlreadyCompletedRace(exc.message) from exc
            raise SubmissionError(f"Error: {exc.message or 'Failed to submit quiz'}") from exc
        return parse_submission_result(data, completion_time, quiz_id)

    def get_user_quizzes(self) -> list[Quiz]:
        return parse_quiz_listing(self._unwrap(self._request("GET", "/quiz/user/quizzes")))

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        data = self._request("GET", "/user/leaderboard")
        if not isinstance(data, dict) or not data.get("success"):
            raise ApiError(200, "Invalid leaderboard data format")
        return parse_leaderboard(data.get("data"))

    # --- Plumbing ---

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        token = self.auth_session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(
                method, url, json=json, params=params, headers=headers, timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("%s %s failed without a response: %s", method, url, exc)
            raise NetworkError("Network error. Please check your connection and try again.") from exc
        except requests.RequestException as exc:
            # Bad URL, redirect loop or a broken body: nothing usable came back.
            logger.warning("%s %s could not be completed: %s", method, url, exc)
            raise NetworkError(f"Request to {self.base_url} failed: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning("%s %s -> %s %s", method, url, response.status_code, message)
            if response.status_code == 401:
                if path not in _CREDENTIAL_PATHS:
                    self.auth_session.expire()
                raise UnauthorizedError(401, message)
            if response.status_code == 404:
                raise NotFoundError(404, message)
            raise ApiError(response.status_code, message)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(response.status_code, "Invalid response from server") from exc

    @staticmethod
    def _unwrap(data: Any) -> Any:
        """Strip the ``{success, data}`` envelope when present."""
        if isinstance(data, dict) and "success" in data and "data" in data:
            return data["data"]
        return data

    def _parse_created_quiz(self, data: Any) -> Quiz:
        if not isinstance(data, dict) or not data.get("success") or not data.get("data"):
            raise ApiError(200, "Invalid response format from server")
        quiz = parse_quiz_listing([data["data"]])
        if not quiz:
            raise ApiError(200, "Invalid quiz response: missing quiz data")
        return quiz[0]


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Request failed with status {response.status_code}"
