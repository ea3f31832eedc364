"""Component listing the user's quizzes with summary statistics."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QStackedLayout,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.ui_constants import (
    DASHBOARD_EMPTY_ATTEMPTED,
    DASHBOARD_EMPTY_MINE,
    DASHBOARD_TAB_ATTEMPTED,
    DASHBOARD_TAB_MINE,
)
from testgenie.core.errors import TestGenieError, UnauthorizedError
from testgenie.core.formatting import format_date, format_time
from testgenie.core.models import Quiz
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route, Screen
from testgenie.core.services.quiz_summary import attempted_quizzes, summarize_quizzes
from testgenie.styling.styles import Styles
from testgenie.ui.dialog_helpers import confirm_delete_quiz, show_error

_COLUMNS = ("Title", "Subject", "Questions", "Score", "Created")


class _QuizTable(QWidget):
    """Table of quizzes with an empty-state label in its place when there are none."""

    def __init__(self, empty_message: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quizzes: list[Quiz] = []
        self._stack = QStackedLayout()
        self.setLayout(self._stack)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self._stack.addWidget(self.table)

        self.empty_label = QLabel(empty_message, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setWordWrap(True)
        self._stack.addWidget(self.empty_label)

    def set_quizzes(self, quizzes: list[Quiz]) -> None:
        self.quizzes = list(quizzes)
        self.table.setRowCount(len(self.quizzes))
        for row, quiz in enumerate(self.quizzes):
            score = f"{quiz.score:.1f}%" if quiz.is_completed and quiz.score is not None else "-"
            cells = (
                quiz.title,
                quiz.subject,
                str(quiz.total_questions),
                score,
                format_date(quiz.created_at),
            )
            for column, text in enumerate(cells):
                self.table.setItem(row, column, QTableWidgetItem(text))
        self._stack.setCurrentIndex(0 if self.quizzes else 1)

    def selected_quiz(self) -> Quiz | None:
        row = self.table.currentRow()
        if 0 <= row < len(self.quizzes):
            return self.quizzes[row]
        return None


class DashboardPanel(QWidget):
    """UI component for the signed-in landing screen."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        navigate: Callable[[Route], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.navigate = navigate
        self._quizzes: list[Quiz] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.welcome_label = QLabel("", self)
        self.welcome_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.welcome_label)

        stats_row = QHBoxLayout()
        self.count_label = QLabel(self)
        self.attempts_label = QLabel(self)
        self.questions_label = QLabel(self)
        self.time_label = QLabel(self)
        for label in (self.count_label, self.attempts_label, self.questions_label, self.time_label):
            stats_row.addWidget(label)
        stats_row.addStretch()
        layout.addLayout(stats_row)

        self.tabs = QTabWidget(self)
        self.mine_table = _QuizTable(DASHBOARD_EMPTY_MINE, self)
        self.attempted_table = _QuizTable(DASHBOARD_EMPTY_ATTEMPTED, self)
        self.tabs.addTab(self.mine_table, DASHBOARD_TAB_MINE)
        self.tabs.addTab(self.attempted_table, DASHBOARD_TAB_ATTEMPTED)
        self.tabs.currentChanged.connect(self._update_buttons)
        for table in (self.mine_table, self.attempted_table):
            table.table.itemSelectionChanged.connect(self._update_buttons)
            table.table.cellDoubleClicked.connect(self._handle_double_click)
        layout.addWidget(self.tabs, stretch=1)

        button_row = QHBoxLayout()
        self.create_button = QPushButton("Create New Quiz", self)
        self.create_button.setStyleSheet(Styles.get_primary_button_style())
        self.create_button.clicked.connect(lambda: self.navigate(Route(Screen.CREATE_QUIZ)))
        button_row.addWidget(self.create_button)
        button_row.addStretch()

        self.take_button = QPushButton("Take", self)
        self.take_button.clicked.connect(self._handle_take)
        button_row.addWidget(self.take_button)

        self.results_button = QPushButton("View Results", self)
        self.results_button.clicked.connect(self._handle_results)
        button_row.addWidget(self.results_button)

        self.delete_button = QPushButton("Delete", self)
        self.delete_button.clicked.connect(self._handle_delete)
        button_row.addWidget(self.delete_button)

        self.refresh_button = QPushButton("Refresh", self)
        self.refresh_button.clicked.connect(self.refresh)
        button_row.addWidget(self.refresh_button)
        layout.addLayout(button_row)

    def enter(self, route: Route) -> None:
        user = self.quiz_manager.auth.user
        self.welcome_label.setText(f"Welcome back, {user.name if user else 'User'}!")
        self.refresh()

    def leave(self) -> None:
        pass

    def refresh(self) -> None:
        try:
            quizzes = self.quiz_manager.list_user_quizzes()
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            show_error(self, "Dashboard", f"Failed to load your quizzes: {exc}")
            quizzes = []
        self._show_quizzes(quizzes)

    def _show_quizzes(self, quizzes: list[Quiz]) -> None:
        self._quizzes = quizzes
        summary = summarize_quizzes(quizzes)
        self.count_label.setText(f"Total Quizzes: {summary.quiz_count}")
        self.attempts_label.setText(f"Quiz Attempts: {summary.total_attempts}")
        self.questions_label.setText(f"Questions Created: {summary.total_questions}")
        self.time_label.setText(
            f"Avg. Completion Time: {format_time(summary.average_completion_time, empty='N/A')}"
        )
        self.mine_table.set_quizzes(quizzes)
        self.attempted_table.set_quizzes(attempted_quizzes(quizzes))
        self._update_buttons()

    def _current_table(self) -> _QuizTable:
        return self.mine_table if self.tabs.currentIndex() == 0 else self.attempted_table

    def _update_buttons(self) -> None:
        quiz = self._current_table().selected_quiz()
        self.take_button.setEnabled(quiz is not None)
        self.take_button.setText("Retake" if quiz is not None and quiz.is_completed else "Take")
        self.results_button.setEnabled(quiz is not None and quiz.is_completed)
        self.delete_button.setEnabled(quiz is not None)

    def _handle_take(self) -> None:
        quiz = self._current_table().selected_quiz()
        if quiz is not None:
            self.navigate(Route(Screen.TAKE_QUIZ, quiz.id, retake=quiz.is_completed))

    def _handle_results(self) -> None:
        quiz = self._current_table().selected_quiz()
        if quiz is not None:
            self.navigate(Route(Screen.QUIZ_RESULTS, quiz.id))

    def _handle_double_click(self, row: int, column: int) -> None:
        quiz = self._current_table().selected_quiz()
        if quiz is None:
            return
        screen = Screen.QUIZ_RESULTS if quiz.is_completed else Screen.TAKE_QUIZ
        self.navigate(Route(screen, quiz.id))

    def _handle_delete(self) -> None:
        quiz = self._current_table().selected_quiz()
        if quiz is None or not confirm_delete_quiz(self, quiz.title):
            return
        try:
            self.quiz_manager.delete_quiz(quiz.id)
        except UnauthorizedError:
            return
        except TestGenieError as exc:
            show_error(self, "Delete failed", str(exc) or "Failed to delete quiz")
            return
        self._show_quizzes([item for item in self._quizzes if item.id != quiz.id])

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        self.mine_table.table.setStyleSheet(style)
        self.attempted_table.table.setStyleSheet(style)
        for label in (self.count_label, self.attempts_label, self.questions_label, self.time_label):
            label.setStyleSheet(style)
