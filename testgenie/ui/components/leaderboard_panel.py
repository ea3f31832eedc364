"""Component for the paginated leaderboard."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.ui_constants import LEADERBOARD_EMPTY_MESSAGE, LEADERBOARD_ERROR_MESSAGE
from testgenie.core.errors import TestGenieError, UnauthorizedError
from testgenie.core.formatting import ScoreBand, format_time, score_band
from testgenie.core.models import RankedUser
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import Route
from testgenie.core.services.leaderboard import Paginator, find_user_rank
from testgenie.styling.color_palette import ColorPalette, Theme
from testgenie.styling.styles import Styles

_COLUMNS = ("Rank", "Name", "Avg. Score", "Quizzes", "Avg. Time")
_BAND_COLORS = {
    ScoreBand.GOOD: ColorPalette.SCORE_GOOD,
    ScoreBand.FAIR: ColorPalette.SCORE_FAIR,
    ScoreBand.POOR: ColorPalette.SCORE_POOR,
}


class LeaderboardPanel(QWidget):
    """UI component listing ranked users ten per page."""

    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.paginator: Paginator[RankedUser] = Paginator([])

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel("Leaderboard", self)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        self.user_rank_label = QLabel("", self)
        layout.addWidget(self.user_rank_label)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.NoSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        layout.addWidget(self.table, stretch=1)

        self.message_label = QLabel("", self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        page_row = QHBoxLayout()
        self.prev_button = QPushButton("Previous", self)
        self.prev_button.clicked.connect(lambda: self._show_page(self.paginator.current_page - 1))
        page_row.addWidget(self.prev_button)
        page_row.addStretch()
        self.page_label = QLabel("", self)
        page_row.addWidget(self.page_label)
        page_row.addStretch()
        self.next_button = QPushButton("Next", self)
        self.next_button.clicked.connect(lambda: self._show_page(self.paginator.current_page + 1))
        page_row.addWidget(self.next_button)
        layout.addLayout(page_row)

    def enter(self, route: Route) -> None:
        self.refresh()

    def leave(self) -> None:
        pass

    def refresh(self) -> None:
        self.message_label.setStyleSheet("")
        try:
            ranked = self.quiz_manager.load_leaderboard()
        except UnauthorizedError:
            return
        except TestGenieError:
            self.paginator = Paginator([])
            self._show_page(1)
            self.user_rank_label.clear()
            self.message_label.setStyleSheet(Styles.get_error_label_style())
            self.message_label.setText(LEADERBOARD_ERROR_MESSAGE)
            self.message_label.setVisible(True)
            return

        self.paginator = Paginator(ranked)
        user = self.quiz_manager.auth.user
        mine = find_user_rank(ranked, user.id if user else None)
        if mine is not None:
            self.user_rank_label.setText(
                f"Your rank: #{mine.rank} of {len(ranked)}  ({mine.score:.1f}% average)"
            )
        else:
            self.user_rank_label.setText("Take a quiz to appear on the leaderboard.")
        self.message_label.setText(LEADERBOARD_EMPTY_MESSAGE)
        self.message_label.setVisible(not ranked)
        self._show_page(1)

    def _show_page(self, page_number: int) -> None:
        rows = self.paginator.page(page_number)
        user = self.quiz_manager.auth.user
        self.table.setRowCount(len(rows))
        for row, entry in enumerate(rows):
            cells = (
                f"#{entry.rank}",
                entry.name,
                f"{entry.score:.1f}%",
                str(entry.quizzes_taken),
                format_time(entry.avg_completion_time),
            )
            for column, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if column == 2:
                    item.setForeground(QColor(_BAND_COLORS[score_band(entry.score)].get(Theme.LIGHT)))
                if user is not None and entry.id == user.id:
                    item.setBackground(QColor(ColorPalette.OPTION_SELECTED_BG.get(Theme.LIGHT)))
                self.table.setItem(row, column, item)
        self.page_label.setText(f"Page {self.paginator.current_page} of {self.paginator.page_count}")
        self.prev_button.setEnabled(self.paginator.has_previous())
        self.next_button.setEnabled(self.paginator.has_next())

    def apply_font_size(self, font_size: int) -> None:
        self.table.setStyleSheet(f"font-size: {font_size}pt;")
