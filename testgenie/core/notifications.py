"""User-facing notification sink used by the core controllers."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Notifier:
    """Default notifier that only logs; the UI installs a subclass that shows toasts."""

    def info(self, message: str) -> None:
        logger.info(message)

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)
