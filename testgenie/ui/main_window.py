"""Qt main window hosting every TestGenie screen behind the route guard."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from testgenie.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from testgenie.constants.ui_constants import (
    NAV_ABOUT,
    NAV_CREATE_QUIZ,
    NAV_DASHBOARD,
    NAV_HELP,
    NAV_LEADERBOARD,
    NAV_LOGOUT,
    NAV_PROFILE,
    NAV_SETTINGS,
    SESSION_EXPIRED_MESSAGE,
    WINDOW_TITLE,
)
from testgenie.core.quiz_manager import QuizManager
from testgenie.core.routes import PUBLIC_SCREENS, Route, Screen, guard
from testgenie.core.take_quiz_controller import TakeQuizController
from testgenie.styling.styles import Styles
from testgenie.ui.components.create_quiz_panel import CreateQuizPanel
from testgenie.ui.components.dashboard_panel import DashboardPanel
from testgenie.ui.components.leaderboard_panel import LeaderboardPanel
from testgenie.ui.components.login_panel import LoginPanel
from testgenie.ui.components.profile_panel import ProfilePanel
from testgenie.ui.components.results_panel import ResultsPanel
from testgenie.ui.components.take_quiz_panel import TakeQuizPanel
from testgenie.ui.dialog_helpers import confirm_logout, show_info
from testgenie.ui.qt_notifier import StatusBarNotifier
from testgenie.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window: navigation bar on top, one stacked panel per screen."""

    def __init__(self, quiz_manager: QuizManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1024, 760)

        self.quiz_manager = quiz_manager
        self.notifier = StatusBarNotifier(self.statusBar())
        self.quiz_manager.set_notifier(self.notifier)
        self.quiz_manager.auth.on_unauthorized = self._handle_unauthorized

        self._ui_font_size: int = 10
        self._question_font_size: int = 14
        self._current_route: Route | None = None
        self._current_panel: QWidget | None = None

        self.take_controller = TakeQuizController(
            api=self.quiz_manager.api,
            notifier=self.notifier,
            navigate=self.navigate,
        )

        self._build_ui()
        self._apply_styles()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.screen_stack = QStackedWidget(self)
        self.login_panel = LoginPanel(self.quiz_manager, self.navigate, self)
        self.dashboard_panel = DashboardPanel(self.quiz_manager, self.navigate, self)
        self.create_quiz_panel = CreateQuizPanel(self.quiz_manager, self.navigate, self)
        self.take_quiz_panel = TakeQuizPanel(self.take_controller, self.navigate, self)
        self.results_panel = ResultsPanel(self.quiz_manager, self.navigate, self)
        self.leaderboard_panel = LeaderboardPanel(self.quiz_manager, self)
        self.profile_panel = ProfilePanel(
            self.quiz_manager, self.navigate, on_logout=self._handle_logout, parent=self
        )

        self._panels = {
            Screen.LOGIN: self.login_panel,
            Screen.REGISTER: self.login_panel,
            Screen.NOT_FOUND: self.dashboard_panel,
            Screen.DASHBOARD: self.dashboard_panel,
            Screen.CREATE_QUIZ: self.create_quiz_panel,
            Screen.TAKE_QUIZ: self.take_quiz_panel,
            Screen.QUIZ_RESULTS: self.results_panel,
            Screen.LEADERBOARD: self.leaderboard_panel,
            Screen.PROFILE: self.profile_panel,
        }
        for panel in dict.fromkeys(self._panels.values()):
            self.screen_stack.addWidget(panel)

        root_layout.addWidget(self.screen_stack, stretch=1)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.nav_buttons: dict[Screen, QPushButton] = {}
        for screen, label in (
            (Screen.DASHBOARD, NAV_DASHBOARD),
            (Screen.CREATE_QUIZ, NAV_CREATE_QUIZ),
            (Screen.LEADERBOARD, NAV_LEADERBOARD),
            (Screen.PROFILE, NAV_PROFILE),
        ):
            button = QPushButton(label, self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, s=screen: self.navigate(Route(s)))
            button_row.addWidget(button)
            self.nav_buttons[screen] = button

        button_row.addStretch()

        self.about_button = QPushButton(NAV_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton(NAV_HELP, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton(NAV_SETTINGS, self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        self.logout_button = QPushButton(NAV_LOGOUT, self)
        self.logout_button.clicked.connect(self._handle_logout)
        button_row.addWidget(self.logout_button)

        layout.addLayout(button_row)

    # --- Navigation ---

    def start(self) -> None:
        """Restore a stored session and show the first screen."""
        self.quiz_manager.restore_session()
        self.navigate(Route(Screen.DASHBOARD))

    def navigate(self, route: Route) -> None:
        target = guard(route, self.quiz_manager.auth.is_authenticated)
        if target != route:
            logger.info("Redirecting %s to %s", route.screen.name, target.screen.name)
        if self._current_panel is not None:
            self._current_panel.leave()

        panel = self._panels[target.screen]
        self._current_route = target
        self._current_panel = panel
        self.screen_stack.setCurrentWidget(panel)
        self._update_nav(target.screen)
        panel.enter(target)

    def _update_nav(self, screen: Screen) -> None:
        signed_in = screen not in PUBLIC_SCREENS
        for nav_screen, button in self.nav_buttons.items():
            button.setVisible(signed_in)
            button.setChecked(nav_screen == screen)
        self.logout_button.setVisible(signed_in)

    def _handle_unauthorized(self) -> None:
        self.notifier.error(SESSION_EXPIRED_MESSAGE)
        self.navigate(Route(Screen.LOGIN))

    def _handle_logout(self) -> None:
        if not confirm_logout(self):
            return
        self.quiz_manager.logout()
        self.navigate(Route(Screen.LOGIN))

    # --- Dialogs ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}\n\n"
            f"Server: {self.quiz_manager.api.base_url}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._question_font_size,
            self.quiz_manager.api.base_url,
        )
        if not dialog.exec():
            return
        self._ui_font_size = dialog.get_ui_font_size()
        self._question_font_size = dialog.get_question_font_size()
        self._apply_styles()

        api_url = dialog.get_api_url()
        if api_url != self.quiz_manager.api.base_url:
            logger.info("Switching API server to %s", api_url)
            self.quiz_manager.use_api_url(api_url)
            self.take_controller.use_api(self.quiz_manager.api)
            self.navigate(Route(Screen.LOGIN))

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            *self.nav_buttons.values(),
            self.about_button,
            self.help_button,
            self.settings_button,
            self.logout_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.login_panel.apply_font_size(self._ui_font_size)
        self.dashboard_panel.apply_font_size(self._ui_font_size)
        self.create_quiz_panel.apply_font_size(self._ui_font_size)
        self.profile_panel.apply_font_size(self._ui_font_size)
        self.leaderboard_panel.apply_font_size(self._ui_font_size)
        self.take_quiz_panel.apply_font_size(self._ui_font_size, self._question_font_size)
        self.results_panel.apply_font_size(self._question_font_size)

    def closeEvent(self, event) -> None:  # noqa: N802
        if self._current_panel is not None:
            self._current_panel.leave()
        super().closeEvent(event)
