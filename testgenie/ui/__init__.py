"""Qt UI components for the TestGenie desktop client."""

from .dialog_helpers import (
    confirm_delete_account,
    confirm_delete_quiz,
    confirm_logout,
    show_error,
    show_info,
    show_warning,
)
from .main_window import MainWindow
from .question_renderer import render_question, render_review

__all__ = [
    "MainWindow",
    "confirm_delete_account",
    "confirm_delete_quiz",
    "confirm_logout",
    "show_error",
    "show_info",
    "show_warning",
    "render_question",
    "render_review",
]
