"""Exception taxonomy shared by the HTTP client, services and UI."""

from __future__ import annotations


class TestGenieError(Exception):
    """Base class for all client errors."""

    __test__ = False  # keep pytest from collecting this as a test class


class ApiError(TestGenieError):
    """The server answered with a non-success status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class UnauthorizedError(ApiError):
    """401: the bearer token is missing, invalid or expired."""


class NotFoundError(ApiError):
    """404: the requested resource does not exist."""


class NetworkError(TestGenieError):
    """No response was received from the server."""


class LoadError(TestGenieError):
    """A quiz payload is missing or malformed and cannot be taken."""


class AlreadyCompletedRace(TestGenieError):
    """The server reports the quiz was already completed by this user."""


class SubmissionError(TestGenieError):
    """A submission failed for a reason the user can retry."""


class ValidationError(TestGenieError):
    """Client-side form validation failed."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(errors.values()))
        self.errors = errors
