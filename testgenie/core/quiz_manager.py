"""Facade over the HTTP client and auth session used by the account and quiz screens."""

from __future__ import annotations

import logging

from testgenie.constants.quiz_constants import AI_FALLBACK_MARKERS
from testgenie.core.api_client import QuizApiClient
from testgenie.core.auth_session import AuthSession
from testgenie.core.errors import ApiError, TestGenieError, UnauthorizedError
from testgenie.core.models import Quiz, RankedUser, User, UserStats
from testgenie.core.notifications import Notifier
from testgenie.core.schemas import ProfileUpdatePayload, QuizSettings
from testgenie.core.services.leaderboard import rank_entries
from testgenie.core import validators

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade for authentication, quiz listing/creation, results and leaderboard."""

    def __init__(self, api: QuizApiClient, auth_session: AuthSession, notifier: Notifier) -> None:
        self.api = api
        self.auth = auth_session
        self._notifier = notifier

    def set_notifier(self, notifier: Notifier) -> None:
        self._notifier = notifier

    def use_api_url(self, base_url: str) -> None:
        """Point at another server; the stored token belongs to the old one."""
        self.auth.sign_out()
        self.api = QuizApiClient(self.auth, base_url=base_url, timeout=self.api.timeout)

    # --- Authentication ---

    def restore_session(self) -> bool:
        """Re-validate a stored token; any failure leaves the user signed out."""
        if not self.auth.has_token():
            return False
        try:
            user = self.api.get_current_user()
        except UnauthorizedError:
            return False
        except TestGenieError as exc:
            logger.warning("Could not restore session: %s", exc)
            self.auth.sign_out()
            return False
        token = self.auth.token
        if token is None:
            return False
        self.auth.sign_in(token, user)
        return True

    def login(self, email: str, password: str) -> User:
        validators.validate_login(email, password)
        token, user = self.api.login(email.strip(), password)
        self.auth.sign_in(token, user)
        self._notifier.success(f"Welcome back, {user.name}!")
        return user

    def register(self, name: str, email: str, password: str, confirm_password: str) -> User:
        validators.validate_registration(name, email, password, confirm_password)
        token, user = self.api.register(name.strip(), email.strip(), password)
        self.auth.sign_in(token, user)
        self._notifier.success("Registration successful! Welcome to TestGenie.")
        return user

    def logout(self) -> None:
        self.auth.sign_out()
        self._notifier.success("Logged out successfully")

    def request_password_reset(self, email: str) -> str:
        validators.validate_password_reset(email)
        return self.api.request_password_reset(email.strip())

    def update_profile(
        self,
        name: str,
        email: str,
        current_password: str = "",
        new_password: str = "",
        confirm_password: str = "",
    ) -> User:
        validators.validate_profile(name, email, current_password, new_password, confirm_password)
        update = ProfileUpdatePayload(name=name.strip(), email=email.strip())
        if new_password and current_password:
            update.current_password = current_password
            update.new_password = new_password
        user = self.api.update_profile(update)
        self.auth.update_user(user)
        self._notifier.success("Profile updated successfully")
        return user

    def delete_account(self) -> None:
        self.api.delete_account()
        self.auth.sign_out()
        self._notifier.success("Your account has been deleted")

    def load_user_stats(self) -> UserStats:
        return self.api.get_user_stats()

    # --- Quizzes ---

    def list_user_quizzes(self) -> list[Quiz]:
        return self.api.get_user_quizzes()

    def delete_quiz(self, quiz_id: str) -> None:
        self.api.delete_quiz(quiz_id)
        self._notifier.success("Quiz deleted successfully")

    def create_quiz(
        self,
        title: str,
        mode: str,
        subject: str,
        custom_subject: str,
        num_questions: int,
        difficulty: str,
    ) -> Quiz:
        """Generate a quiz with AI, falling back once to basic questions on quota errors."""
        chosen_subject = validators.validate_quiz_form(
            title, mode, subject, custom_subject, num_questions, difficulty
        )
        settings = QuizSettings(
            title=title.strip(),
            subject=chosen_subject,
            num_questions=num_questions,
            difficulty=difficulty,
        )
        logger.info("Generating %d-question %s quiz on %s", num_questions, difficulty, chosen_subject)
        try:
            quiz = self.api.generate_quiz(settings)
        except ApiError as exc:
            if not _is_quota_error(exc):
                raise
            logger.warning("AI generation unavailable (%s); using basic questions", exc.message)
            self._notifier.info("AI quota exceeded. Using basic questions instead.")
            quiz = self.api.generate_basic_quiz(settings)
        self._notifier.success("Quiz created successfully!")
        return quiz

    def load_results(self, quiz_id: str) -> Quiz | None:
        """Return the completed quiz, or None when it still has to be taken."""
        quiz = self.api.get_quiz(quiz_id)
        return quiz if quiz.is_completed else None

    def load_leaderboard(self) -> list[RankedUser]:
        return rank_entries(self.api.get_leaderboard())


def _is_quota_error(error: ApiError) -> bool:
    if isinstance(error, UnauthorizedError):
        return False
    message = (error.message or "").lower()
    return any(marker in message for marker in AI_FALLBACK_MARKERS)
