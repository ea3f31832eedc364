"""Helper functions for common dialog patterns in the TestGenie UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QInputDialog, QLineEdit, QMessageBox, QWidget

from testgenie.constants.quiz_constants import DELETE_ACCOUNT_CONFIRMATION


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def _ask_yes_no(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_delete_quiz(parent: QWidget, quiz_title: str) -> bool:
    """Show confirmation dialog for deleting a quiz.
    
    Args:
        parent: Parent widget for the dialog
        quiz_title: Title shown in the prompt
    
    Returns:
        True if user confirmed, False otherwise
    """
    return _ask_yes_no(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete \"{quiz_title}\"? This cannot be undone.",
    )


def confirm_logout(parent: QWidget) -> bool:
    """Ask before signing out."""
    return _ask_yes_no(parent, "Log Out", "Are you sure you want to log out?")


def confirm_delete_account(parent: QWidget) -> bool:
    """Require the user to type the confirmation word before deleting the account.
    
    Returns:
        True only when the typed text matches exactly
    """
    text, accepted = QInputDialog.getText(
        parent,
        "Delete Account",
        "This permanently deletes your account and all of your quizzes.\n"
        f"Type {DELETE_ACCOUNT_CONFIRMATION} to confirm:",
        QLineEdit.Normal,
        "",
    )
    return bool(accepted) and text == DELETE_ACCOUNT_CONFIRMATION


def ask_email(parent: QWidget, initial: str = "") -> str | None:
    """Prompt for the address a password reset link should go to."""
    text, accepted = QInputDialog.getText(
        parent,
        "Reset Password",
        "Enter the email address of your account:",
        QLineEdit.Normal,
        initial,
    )
    if not accepted:
        return None
    return text


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.
    
    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog, optionally with a larger font."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
