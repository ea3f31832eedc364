"""Component for account details, statistics and account removal."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from testgenie.core.errors import TestGenieError, UnauthorizedError, ValidationError
from testgenie.core.formatting import format_date, format_time
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route, Screen
from testgenie.styling.styles import Styles
from testgenie.ui.dialog_helpers import confirm_delete_account, show_error


class ProfilePanel(QWidget):
    """UI component for the signed-in user's profile."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        navigate: Callable[[Route], None],
        on_logout: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.navigate = navigate
        self.on_logout = on_logout

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.heading_label = QLabel("", self)
        self.heading_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.heading_label)

        self.member_label = QLabel("", self)
        self.member_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.member_label)

        stats_group = QGroupBox("Statistics", self)
        stats_layout = QHBoxLayout()
        stats_group.setLayout(stats_layout)
        self.taken_label = QLabel(self)
        self.average_label = QLabel(self)
        self.created_label = QLabel(self)
        self.time_label = QLabel(self)
        for label in (self.taken_label, self.average_label, self.created_label, self.time_label):
            stats_layout.addWidget(label)
        layout.addWidget(stats_group)

        details_group = QGroupBox("Account", self)
        form = QFormLayout()
        details_group.setLayout(form)
        self.name_edit = QLineEdit(self)
        form.addRow("Name:", self.name_edit)
        self.email_edit = QLineEdit(self)
        form.addRow("Email:", self.email_edit)
        self.current_password_edit = QLineEdit(self)
        self.current_password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Current password:", self.current_password_edit)
        self.new_password_edit = QLineEdit(self)
        self.new_password_edit.setEchoMode(QLineEdit.Password)
        self.new_password_edit.setPlaceholderText("Leave blank to keep your password")
        form.addRow("New password:", self.new_password_edit)
        self.confirm_password_edit = QLineEdit(self)
        self.confirm_password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Confirm new password:", self.confirm_password_edit)
        layout.addWidget(details_group)

        self.error_label = QLabel("", self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(Styles.get_error_label_style())
        layout.addWidget(self.error_label)

        button_row = QHBoxLayout()
        self.delete_button = QPushButton("Delete Account", self)
        self.delete_button.setStyleSheet(Styles.get_error_label_style())
        self.delete_button.clicked.connect(self._handle_delete_account)
        button_row.addWidget(self.delete_button)
        self.logout_button = QPushButton("Log Out", self)
        self.logout_button.clicked.connect(self.on_logout)
        button_row.addWidget(self.logout_button)
        button_row.addStretch()
        self.save_button = QPushButton("Save Changes", self)
        self.save_button.setStyleSheet(Styles.get_primary_button_style())
        self.save_button.clicked.connect(self._handle_save)
        button_row.addWidget(self.save_button)
        layout.addLayout(button_row)
        layout.addStretch()

    def enter(self, route: Route) -> None:
        self.error_label.clear()
        self._clear_passwords()
        user = self.quiz_manager.auth.user
        if user is not None:
            self.heading_label.setText(user.name)
            self.member_label.setText(
                f"{user.email} · member since {format_date(user.created_at) or 'today'}"
            )
            self.name_edit.setText(user.name)
            self.email_edit.setText(user.email)
        self._load_stats()

    def leave(self) -> None:
        self._clear_passwords()

    def _clear_passwords(self) -> None:
        for edit in (self.current_password_edit, self.new_password_edit, self.confirm_password_edit):
            edit.clear()

    def _load_stats(self) -> None:
        try:
            stats = self.quiz_manager.load_user_stats()
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            self.error_label.setText(f"Could not load statistics: {exc}")
            return
        self.taken_label.setText(f"Quizzes taken: {stats.quizzes_taken}")
        self.average_label.setText(f"Average score: {stats.average_score:.1f}%")
        self.created_label.setText(f"Quizzes created: {stats.quizzes_created}")
        self.time_label.setText(
            f"Avg. time: {format_time(stats.average_completion_time, empty='N/A')}"
        )

    def _handle_save(self) -> None:
        self.error_label.clear()
        try:
            user = self.quiz_manager.update_profile(
                self.name_edit.text(),
                self.email_edit.text(),
                self.current_password_edit.text(),
                self.new_password_edit.text(),
                self.confirm_password_edit.text(),
            )
        except ValidationError as exc:
            self.error_label.setText("\n".join(exc.errors.values()))
            return
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            self.error_label.setText(str(exc) or "Failed to update profile")
            return
        self._clear_passwords()
        self.heading_label.setText(user.name)

    def _handle_delete_account(self) -> None:
        if not confirm_delete_account(self):
            return
        try:
            self.quiz_manager.delete_account()
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            show_error(self, "Delete Account", str(exc) or "Failed to delete account")
            return
        self.navigate(Route(Screen.LOGIN))

    def apply_font_size(self, font_size: int) -> None:
        self.setStyleSheet(f"QLineEdit, QGroupBox {{ font-size: {font_size}pt; }}")
