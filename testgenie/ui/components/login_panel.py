"""Component for the login and registration screens."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.ui_constants import (
    FORGOT_PASSWORD_BUTTON,
    LOGIN_BUTTON,
    LOGIN_TITLE,
    REGISTER_BUTTON,
    REGISTER_TITLE,
    SWITCH_TO_LOGIN,
    SWITCH_TO_REGISTER,
)
from testgenie.core.errors import TestGenieError, ValidationError
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route, Screen
from testgenie.styling.styles import Styles
from testgenie.ui.dialog_helpers import ask_email, show_error, show_info


class LoginPanel(QWidget):
    """Login form that doubles as the registration form."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        navigate: Callable[[Route], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.navigate = navigate
        self._register_mode = False

        self._build_ui()
        self._apply_mode()

    def _build_ui(self) -> None:
        outer = QVBoxLayout()
        self.setLayout(outer)
        outer.addStretch()

        self.title_label = QLabel(LOGIN_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        outer.addWidget(self.title_label)

        form = QFormLayout()
        self.name_edit = QLineEdit(self)
        self.name_label = QLabel("Name:", self)
        form.addRow(self.name_label, self.name_edit)

        self.email_edit = QLineEdit(self)
        self.email_edit.setPlaceholderText("you@example.com")
        form.addRow("Email:", self.email_edit)

        self.password_edit = QLineEdit(self)
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Password:", self.password_edit)

        self.confirm_edit = QLineEdit(self)
        self.confirm_edit.setEchoMode(QLineEdit.Password)
        self.confirm_label = QLabel("Confirm password:", self)
        form.addRow(self.confirm_label, self.confirm_edit)
        outer.addLayout(form)

        self.error_label = QLabel("", self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(Styles.get_error_label_style())
        outer.addWidget(self.error_label)

        self.submit_button = QPushButton(LOGIN_BUTTON, self)
        self.submit_button.setStyleSheet(Styles.get_primary_button_style())
        self.submit_button.clicked.connect(self._handle_submit)
        outer.addWidget(self.submit_button)

        link_row = QHBoxLayout()
        self.forgot_button = QPushButton(FORGOT_PASSWORD_BUTTON, self)
        self.forgot_button.setFlat(True)
        self.forgot_button.clicked.connect(self._handle_forgot_password)
        link_row.addWidget(self.forgot_button)
        link_row.addStretch()
        self.switch_button = QPushButton(SWITCH_TO_REGISTER, self)
        self.switch_button.setFlat(True)
        self.switch_button.clicked.connect(self._handle_switch)
        link_row.addWidget(self.switch_button)
        outer.addLayout(link_row)

        outer.addStretch()
        self.password_edit.returnPressed.connect(self._handle_submit)
        self.confirm_edit.returnPressed.connect(self._handle_submit)

    def enter(self, route: Route) -> None:
        self._register_mode = route.screen == Screen.REGISTER
        self.password_edit.clear()
        self.confirm_edit.clear()
        self.error_label.clear()
        self._apply_mode()

    def leave(self) -> None:
        self.password_edit.clear()
        self.confirm_edit.clear()

    def _apply_mode(self) -> None:
        register = self._register_mode
        self.title_label.setText(REGISTER_TITLE if register else LOGIN_TITLE)
        self.submit_button.setText(REGISTER_BUTTON if register else LOGIN_BUTTON)
        self.switch_button.setText(SWITCH_TO_LOGIN if register else SWITCH_TO_REGISTER)
        for widget in (self.name_label, self.name_edit, self.confirm_label, self.confirm_edit):
            widget.setVisible(register)
        self.forgot_button.setVisible(not register)

    def _handle_switch(self) -> None:
        self.navigate(Route(Screen.LOGIN if self._register_mode else Screen.REGISTER))

    def _handle_submit(self) -> None:
        self.error_label.clear()
        self.submit_button.setEnabled(False)
        try:
            if self._register_mode:
                self.quiz_manager.register(
                    self.name_edit.text(),
                    self.email_edit.text(),
                    self.password_edit.text(),
                    self.confirm_edit.text(),
                )
            else:
                self.quiz_manager.login(self.email_edit.text(), self.password_edit.text())
        except ValidationError as exc:
            self.error_label.setText("\n".join(exc.errors.values()))
            return
        except TestGenieError as exc:
            self.error_label.setText(str(exc))
            return
        finally:
            self.submit_button.setEnabled(True)
        self.navigate(Route(Screen.DASHBOARD))

    def _handle_forgot_password(self) -> None:
        email = ask_email(self, self.email_edit.text().strip())
        if email is None:
            return
        try:
            message = self.quiz_manager.request_password_reset(email)
        except ValidationError as exc:
            show_error(self, "Reset Password", "\n".join(exc.errors.values()))
            return
        except TestGenieError as exc:
            show_error(self, "Reset Password", str(exc))
            return
        show_info(self, "Reset Password", message)

    def apply_font_size(self, font_size: int) -> None:
        self.setStyleSheet(f"QLineEdit, QLabel, QPushButton {{ font-size: {font_size}pt; }}")
