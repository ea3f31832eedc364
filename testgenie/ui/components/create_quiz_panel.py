"""Component for generating a new quiz."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.quiz_constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_QUESTION_COUNT,
    DIFFICULTY_LEVELS,
    PREDEFINED_SUBJECTS,
    QUESTION_COUNT_CHOICES,
)
from testgenie.constants.ui_constants import (
    CREATE_GENERATING_LABEL,
    CREATE_MODE_CUSTOM,
    CREATE_MODE_SUBJECT,
    CREATE_SUBMIT_BUTTON,
)
from testgenie.core.errors import TestGenieError, UnauthorizedError, ValidationError
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route, Screen
from testgenie.styling.styles import Styles
from testgenie.ui.dialog_helpers import show_error


class CreateQuizPanel(QWidget):
    """Form collecting the generation settings for a new quiz."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        navigate: Callable[[Route], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.navigate = navigate

        self._build_ui()
        self.reset_state()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel("Create a New Quiz", self)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        form = QFormLayout()
        self.title_edit = QLineEdit(self)
        self.title_edit.setPlaceholderText("e.g. Data Structures Basics")
        form.addRow("Title:", self.title_edit)

        mode_row = QHBoxLayout()
        self.subject_mode_radio = QRadioButton(CREATE_MODE_SUBJECT, self)
        self.custom_mode_radio = QRadioButton(CREATE_MODE_CUSTOM, self)
        self._mode_group = QButtonGroup(self)
        self._mode_group.addButton(self.subject_mode_radio)
        self._mode_group.addButton(self.custom_mode_radio)
        self.subject_mode_radio.toggled.connect(self._update_mode)
        mode_row.addWidget(self.subject_mode_radio)
        mode_row.addWidget(self.custom_mode_radio)
        mode_row.addStretch()
        form.addRow("Mode:", mode_row)

        self.subject_combo = QComboBox(self)
        self.subject_combo.addItem("Select a subject", "")
        for subject in PREDEFINED_SUBJECTS:
            self.subject_combo.addItem(subject, subject)
        form.addRow("Subject:", self.subject_combo)

        self.custom_subject_edit = QLineEdit(self)
        self.custom_subject_edit.setPlaceholderText("Any topic you like")
        form.addRow("Custom subject:", self.custom_subject_edit)

        self.count_combo = QComboBox(self)
        for count in QUESTION_COUNT_CHOICES:
            self.count_combo.addItem(str(count), count)
        form.addRow("Number of questions:", self.count_combo)

        self.difficulty_combo = QComboBox(self)
        for level in DIFFICULTY_LEVELS:
            self.difficulty_combo.addItem(level.capitalize(), level)
        form.addRow("Difficulty:", self.difficulty_combo)
        layout.addLayout(form)

        self.error_label = QLabel("", self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(Styles.get_error_label_style())
        layout.addWidget(self.error_label)

        self.status_label = QLabel("", self)
        self.status_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.status_label)

        button_row = QHBoxLayout()
        self.cancel_button = QPushButton("Cancel", self)
        self.cancel_button.clicked.connect(lambda: self.navigate(Route(Screen.DASHBOARD)))
        button_row.addWidget(self.cancel_button)
        button_row.addStretch()
        self.submit_button = QPushButton(CREATE_SUBMIT_BUTTON, self)
        self.submit_button.setStyleSheet(Styles.get_primary_button_style())
        self.submit_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.submit_button)
        layout.addLayout(button_row)
        layout.addStretch()

    def enter(self, route: Route) -> None:
        self.reset_state()

    def leave(self) -> None:
        pass

    def reset_state(self) -> None:
        self.title_edit.clear()
        self.custom_subject_edit.clear()
        self.subject_combo.setCurrentIndex(0)
        self.subject_mode_radio.setChecked(True)
        self.count_combo.setCurrentIndex(QUESTION_COUNT_CHOICES.index(DEFAULT_QUESTION_COUNT))
        self.difficulty_combo.setCurrentIndex(DIFFICULTY_LEVELS.index(DEFAULT_DIFFICULTY))
        self.error_label.clear()
        self.status_label.clear()
        self._update_mode()

    def _mode(self) -> str:
        return "subject" if self.subject_mode_radio.isChecked() else "custom"

    def _update_mode(self) -> None:
        subject_mode = self._mode() == "subject"
        self.subject_combo.setEnabled(subject_mode)
        self.custom_subject_edit.setEnabled(not subject_mode)

    def _set_busy(self, busy: bool) -> None:
        self.submit_button.setEnabled(not busy)
        self.cancel_button.setEnabled(not busy)
        self.status_label.setText(CREATE_GENERATING_LABEL if busy else "")
        # Paint the busy label before the blocking request starts.
        QCoreApplication.processEvents()

    def _handle_submit(self) -> None:
        self.error_label.clear()
        self._set_busy(True)
        try:
            self.quiz_manager.create_quiz(
                title=self.title_edit.text(),
                mode=self._mode(),
                subject=self.subject_combo.currentData() or "",
                custom_subject=self.custom_subject_edit.text(),
                num_questions=self.count_combo.currentData(),
                difficulty=self.difficulty_combo.currentData(),
            )
        except ValidationError as exc:
            self.error_label.setText("\n".join(exc.errors.values()))
            return
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            show_error(self, "Quiz generation failed", str(exc) or "Failed to create quiz")
            return
        finally:
            self._set_busy(False)
        self.navigate(Route(Screen.DASHBOARD))

    def apply_font_size(self, font_size: int) -> None:
        self.setStyleSheet(f"QLineEdit, QComboBox, QRadioButton {{ font-size: {font_size}pt; }}")
