"""Logging configuration helpers for the TestGenie client."""

from __future__ import annotations

import logging
import os
from logging import Logger


def configure_logging(level: str | None = None) -> Logger:
    """Configure basic logging for the application and return the package logger.

    ``level`` falls back to ``TESTGENIE_LOG_LEVEL`` and then INFO.
    """
    name = (level or os.environ.get("TESTGENIE_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("testgenie")
