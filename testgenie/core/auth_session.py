"""Authentication state passed explicitly to the HTTP client."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable

from testgenie.core.models import User
from testgenie.core.quiz_parser import parse_user, user_to_payload

logger = logging.getLogger(__name__)

_DEFAULT_SESSION_FILE = Path.home() / ".testgenie" / "session.json"


def default_session_path() -> Path:
    override = os.environ.get("TESTGENIE_SESSION_FILE")
    return Path(override) if override else _DEFAULT_SESSION_FILE


class AuthSession:
    """Holds the bearer token and signed-in user, persisted to a JSON file.

    ``on_unauthorized`` replaces a hard redirect: the HTTP client calls
    :meth:`expire` on any 401, and whoever owns navigation decides what to do.
    Pass ``storage_path=None`` to keep the session in memory only.
    """

    def __init__(
        self,
        storage_path: Path | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self._storage_path = storage_path
        self.on_unauthorized = on_unauthorized
        self._token: str | None = None
        self._user: User | None = None
        self._load()

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None and self._user is not None

    def has_token(self) -> bool:
        return self._token is not None

    def sign_in(self, token: str, user: User) -> None:
        self._token = token
        self._user = user
        self._save()
        logger.info("Signed in as %s", user.email)

    def update_user(self, user: User) -> None:
        self._user = user
        self._save()

    def sign_out(self) -> None:
        self._token = None
        self._user = None
        self._delete()

    def expire(self) -> None:
        """Drop credentials after a 401 and notify the owner."""
        had_token = self._token is not None
        self.sign_out()
        if had_token:
            logger.warning("Session expired; credentials cleared.")
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    def _load(self) -> None:
        if self._storage_path is None or not self._storage_path.exists():
            return
        try:
            data = json.loads(self._storage_path.read_text(encoding="utf-8"))
            token = data.get("token")
            user_payload = data.get("user")
            self._token = token if isinstance(token, str) and token else None
            self._user = parse_user(user_payload) if user_payload else None
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._storage_path, exc)
            self._token = None
            self._user = None

    def _save(self) -> None:
        if self._storage_path is None:
            return
        document = {
            "token": self._token,
            "user": user_to_payload(self._user) if self._user else None,
        }
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._storage_path.write_text(json.dumps(document), encoding="utf-8")

    def _delete(self) -> None:
        if self._storage_path is None:
            return
        try:
            self._storage_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove session file %s: %s", self._storage_path, exc)
