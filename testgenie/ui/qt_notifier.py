"""Notifier that shows toasts in the main window's status bar."""

from __future__ import annotations

from PySide6.QtWidgets import QStatusBar

from testgenie.constants.ui_constants import TOAST_DURATION_MS
from testgenie.core.notifications import Notifier
from testgenie.styling.color_palette import ColorPalette, Theme


class StatusBarNotifier(Notifier):
    """Logs like the base notifier and mirrors each message in the status bar."""

    def __init__(self, status_bar: QStatusBar, theme: Theme = Theme.LIGHT) -> None:
        self._status_bar = status_bar
        self._theme = theme

    def info(self, message: str) -> None:
        super().info(message)
        self._show(message, ColorPalette.TEXT_PRIMARY.get(self._theme))

    def success(self, message: str) -> None:
        super().success(message)
        self._show(message, ColorPalette.SCORE_GOOD.get(self._theme))

    def error(self, message: str) -> None:
        super().error(message)
        self._show(message, ColorPalette.ERROR.get(self._theme))

    def _show(self, message: str, color: str) -> None:
        self._status_bar.setStyleSheet(f"QStatusBar {{ color: {color}; font-weight: bold; }}")
        self._status_bar.showMessage(message, TOAST_DURATION_MS)
