"""Client-side form validation; every check raises ``ValidationError``."""

from __future__ import annotations

import re

from testgenie.constants.quiz_constants import (
    DIFFICULTY_LEVELS,
    MIN_PASSWORD_LENGTH,
    PREDEFINED_SUBJECTS,
    QUESTION_COUNT_CHOICES,
)
from testgenie.core.errors import ValidationError

_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _check_email(email: str, errors: dict[str, str]) -> None:
    if not email.strip():
        errors["email"] = "Email is required"
    elif not _EMAIL_PATTERN.search(email):
        errors["email"] = "Please enter a valid email address"


def _raise_if_any(errors: dict[str, str]) -> None:
    if errors:
        raise ValidationError(errors)


def validate_login(email: str, password: str) -> None:
    errors: dict[str, str] = {}
    _check_email(email, errors)
    if not password:
        errors["password"] = "Password is required"
    _raise_if_any(errors)


def validate_registration(name: str, email: str, password: str, confirm_password: str) -> None:
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = "Name is required"
    _check_email(email, errors)
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    _raise_if_any(errors)


def validate_password_reset(email: str) -> None:
    errors: dict[str, str] = {}
    _check_email(email, errors)
    _raise_if_any(errors)


def validate_profile(
    name: str,
    email: str,
    current_password: str = "",
    new_password: str = "",
    confirm_password: str = "",
) -> None:
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = "Name is required"
    _check_email(email, errors)
    if new_password or confirm_password:
        if not current_password:
            errors["current_password"] = "Current password is required to change password"
        if new_password and len(new_password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if new_password != confirm_password:
            errors["confirm_password"] = "Passwords do not match"
    _raise_if_any(errors)


def validate_quiz_form(
    title: str,
    mode: str,
    subject: str,
    custom_subject: str,
    num_questions: int,
    difficulty: str,
) -> str:
    """Validate the create-quiz form and return the subject to request."""
    errors: dict[str, str] = {}
    if not title.strip():
        errors["title"] = "Please enter a quiz title"
    if mode == "subject":
        if subject not in PREDEFINED_SUBJECTS:
            errors["subject"] = "Please select a subject"
        chosen = subject
    elif mode == "custom":
        if not custom_subject.strip():
            errors["subject"] = "Please enter a subject"
        chosen = custom_subject.strip()
    else:
        errors["mode"] = f"Unknown generation mode: {mode}"
        chosen = ""
    if num_questions not in QUESTION_COUNT_CHOICES:
        errors["num_questions"] = "Please choose a supported number of questions"
    if difficulty not in DIFFICULTY_LEVELS:
        errors["difficulty"] = "Please choose a difficulty level"
    _raise_if_any(errors)
    return chosen
