"""Component for taking a quiz one question at a time."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QCoreApplication, QTimer
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.quiz_constants import TIMER_TICK_INTERVAL_MS
from testgenie.constants.ui_constants import (
    BACK_TO_DASHBOARD_BUTTON,
    TAKE_FINISH_BUTTON,
    TAKE_LOADING_LABEL,
    TAKE_NEXT_BUTTON,
    TAKE_PREV_BUTTON,
    TAKE_SUBMITTING_LABEL,
    TRY_AGAIN_BUTTON,
    VIEW_RESULTS_BUTTON,
)
from testgenie.core.formatting import format_time
from testgenie.core.routes import Route, Screen
from testgenie.core.services.take_session import OptionState, SessionState
from testgenie.core.take_quiz_controller import TakeQuizController
from testgenie.styling.styles import Styles
from testgenie.ui.question_renderer import render_question

_OPTION_LETTERS = "ABCDEFGHIJ"


class TakeQuizPanel(QWidget):
    """UI component driving a TakeQuizController."""

    def __init__(
        self,
        controller: TakeQuizController,
        navigate: Callable[[Route], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self.navigate = navigate
        self._question_font_size: int = 14
        self._ui_font_size: int = 10
        self.option_buttons: list[QPushButton] = []

        self._build_ui()
        self._configure_tick_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label)
        header_row.addStretch()
        self.timer_label = QLabel(format_time(0), self)
        self.timer_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.timer_label)
        layout.addLayout(header_row)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setTextVisible(True)
        layout.addWidget(self.progress_bar)

        self.status_label = QLabel(TAKE_LOADING_LABEL, self)
        self.status_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.status_label)

        self.question_view = QWebEngineView(self)
        self.question_view.setMinimumHeight(180)
        layout.addWidget(self.question_view, stretch=1)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(TAKE_PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        nav_row.addStretch()
        self.next_button = QPushButton(TAKE_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        self.finish_button = QPushButton(TAKE_FINISH_BUTTON, self)
        self.finish_button.setStyleSheet(Styles.get_primary_button_style())
        self.finish_button.clicked.connect(self._handle_finish)
        nav_row.addWidget(self.finish_button)
        layout.addLayout(nav_row)

        completed_row = QHBoxLayout()
        self.completed_label = QLabel("", self)
        completed_row.addWidget(self.completed_label)
        completed_row.addStretch()
        self.results_button = QPushButton(VIEW_RESULTS_BUTTON, self)
        self.results_button.clicked.connect(self.controller.view_results)
        completed_row.addWidget(self.results_button)
        self.retry_button = QPushButton(TRY_AGAIN_BUTTON, self)
        self.retry_button.clicked.connect(self.controller.try_again)
        completed_row.addWidget(self.retry_button)
        self.back_button = QPushButton(BACK_TO_DASHBOARD_BUTTON, self)
        self.back_button.clicked.connect(lambda: self.navigate(Route(Screen.DASHBOARD)))
        completed_row.addWidget(self.back_button)
        self.completed_widget = QWidget(self)
        self.completed_widget.setLayout(completed_row)
        layout.addWidget(self.completed_widget)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TIMER_TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._handle_tick)

    # --- Lifecycle ---

    def enter(self, route: Route) -> None:
        self._clear_options()
        self.title_label.setText("")
        self.question_view.setHtml("")
        self.status_label.setText(TAKE_LOADING_LABEL)
        self.completed_widget.setVisible(False)
        for button in (self.prev_button, self.next_button, self.finish_button):
            button.setEnabled(False)
        QCoreApplication.processEvents()

        self.controller.load(route.quiz_id, route.retake)
        if self.controller.state == SessionState.ERROR or self.controller.session is None:
            return
        if self.controller.state != SessionState.COMPLETED:
            self.tick_timer.start()
        self._render()

    def leave(self) -> None:
        self.tick_timer.stop()
        self.controller.close()

    # --- Rendering ---

    def _render(self) -> None:
        controller = self.controller
        session = controller.session
        if session is None:
            return
        completed = controller.state == SessionState.COMPLETED
        question = session.current_question
        index = session.current_index

        self.title_label.setText(session.quiz.title)
        self.progress_bar.setRange(0, session.question_count)
        self.progress_bar.setValue(session.answered_count())
        self.progress_bar.setFormat(
            f"Question {index + 1} of {session.question_count}  ({session.answered_count()} answered)"
        )
        self.timer_label.setText(format_time(controller.displayed_seconds))
        self.status_label.setText(TAKE_SUBMITTING_LABEL if controller.state == SessionState.SUBMITTING else "")

        revealed = session.current_revealed
        self.question_view.setHtml(
            render_question(
                question,
                index + 1,
                session.question_count,
                font_size=self._question_font_size,
                show_explanation=revealed,
            )
        )

        self._clear_options()
        for option_index, (option, state) in enumerate(zip(question.options, controller.option_states())):
            letter = _OPTION_LETTERS[option_index] if option_index < len(_OPTION_LETTERS) else "?"
            button = QPushButton(f"{letter}. {option.text}", self)
            button.setStyleSheet(
                Styles.get_option_button_style(state)
                + f" QPushButton {{ font-size: {self._question_font_size}pt; }}"
            )
            button.setEnabled(not revealed and not completed)
            button.clicked.connect(lambda _checked=False, i=option_index: self._handle_option(i))
            self.options_layout.addWidget(button)
            self.option_buttons.append(button)

        busy = controller.state == SessionState.SUBMITTING
        self.prev_button.setEnabled(not busy and controller.can_go_previous())
        self.next_button.setEnabled(not busy and controller.can_go_next())
        self.finish_button.setEnabled(controller.can_finish())
        for button in (self.prev_button, self.next_button, self.finish_button):
            button.setVisible(not completed)

        self.completed_widget.setVisible(completed)
        if completed:
            score = session.score
            score_text = f"{score:.1f}%" if score is not None else "-"
            self.completed_label.setText(f"Quiz completed. Score: {score_text}")

    def _clear_options(self) -> None:
        for button in self.option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self.option_buttons = []

    # --- Handlers ---

    def _handle_tick(self) -> None:
        seconds = self.controller.tick()
        self.timer_label.setText(format_time(seconds))
        if self.controller.state == SessionState.COMPLETED:
            self.tick_timer.stop()

    def _handle_option(self, option_index: int) -> None:
        if self.controller.select_option(option_index):
            self._render()

    def _handle_next(self) -> None:
        if self.controller.go_next():
            self._render()

    def _handle_previous(self) -> None:
        if self.controller.go_previous():
            self._render()

    def _handle_finish(self) -> None:
        self.finish_button.setEnabled(False)
        self.prev_button.setEnabled(False)
        self.status_label.setText(TAKE_SUBMITTING_LABEL)
        QCoreApplication.processEvents()
        if not self.controller.finish():
            self._render()

    def apply_font_size(self, ui_font_size: int, question_font_size: int) -> None:
        self._ui_font_size = ui_font_size
        self._question_font_size = question_font_size
        style = f"font-size: {ui_font_size}pt;"
        for button in (
            self.prev_button,
            self.next_button,
            self.results_button,
            self.retry_button,
            self.back_button,
        ):
            button.setStyleSheet(style)
        if self.controller.session is not None and self.isVisible():
            self._render()
