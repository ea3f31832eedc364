"""Component showing a completed quiz with its score and answer review."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.ui_constants import BACK_TO_DASHBOARD_BUTTON, TRY_AGAIN_BUTTON
from testgenie.core.errors import TestGenieError, UnauthorizedError
from testgenie.core.formatting import format_time, score_band, score_message
from testgenie.core.models import Quiz
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route, Screen
from testgenie.styling.styles import Styles
from testgenie.ui.dialog_helpers import show_error
from testgenie.ui.question_renderer import render_review


class ResultsPanel(QWidget):
    """UI component for reviewing a scored quiz."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        navigate: Callable[[Route], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.navigate = navigate
        self.quiz: Quiz | None = None
        self._review_font_size: int = 12

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.subject_label = QLabel("", self)
        self.subject_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.subject_label)

        score_row = QHBoxLayout()
        self.score_bar = QProgressBar(self)
        self.score_bar.setRange(0, 100)
        score_row.addWidget(self.score_bar, stretch=1)
        self.message_label = QLabel("", self)
        self.message_label.setStyleSheet(Styles.get_large_label_style())
        score_row.addWidget(self.message_label)
        layout.addLayout(score_row)

        details_row = QHBoxLayout()
        self.time_label = QLabel("", self)
        self.attempts_label = QLabel("", self)
        details_row.addWidget(self.time_label)
        details_row.addWidget(self.attempts_label)
        details_row.addStretch()
        layout.addLayout(details_row)

        self.review_view = QWebEngineView(self)
        layout.addWidget(self.review_view, stretch=1)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(BACK_TO_DASHBOARD_BUTTON, self)
        self.back_button.clicked.connect(lambda: self.navigate(Route(Screen.DASHBOARD)))
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        self.retry_button = QPushButton(TRY_AGAIN_BUTTON, self)
        self.retry_button.setStyleSheet(Styles.get_primary_button_style())
        self.retry_button.clicked.connect(self._handle_try_again)
        button_row.addWidget(self.retry_button)
        layout.addLayout(button_row)

    def enter(self, route: Route) -> None:
        self.quiz = None
        self.review_view.setHtml("")
        quiz_id = route.quiz_id or ""
        try:
            quiz = self.quiz_manager.load_results(quiz_id)
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            show_error(self, "Results", str(exc) or "Failed to load quiz results")
            self.navigate(Route(Screen.DASHBOARD))
            return
        if quiz is None:
            self.navigate(Route(Screen.TAKE_QUIZ, quiz_id))
            return
        self.quiz = quiz
        self._render()

    def leave(self) -> None:
        pass

    def _render(self) -> None:
        quiz = self.quiz
        if quiz is None:
            return
        score = quiz.score or 0
        self.title_label.setText(quiz.title)
        self.subject_label.setText(quiz.subject)
        self.score_bar.setValue(round(score))
        self.score_bar.setFormat(f"{score:.1f}%")
        self.score_bar.setStyleSheet(Styles.get_score_bar_style(score_band(score)))
        self.message_label.setText(score_message(score))
        self.time_label.setText(f"Completion time: {format_time(quiz.completion_time)}")
        self.attempts_label.setText(f"Attempts: {quiz.attempts}")
        self.review_view.setHtml(render_review(quiz, font_size=self._review_font_size))

    def _handle_try_again(self) -> None:
        if self.quiz is not None:
            self.navigate(Route(Screen.TAKE_QUIZ, self.quiz.id, retake=True))

    def apply_font_size(self, font_size: int) -> None:
        self._review_font_size = font_size
        if self.quiz is not None:
            self._render()
