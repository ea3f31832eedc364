"""Application entry point for the TestGenie desktop client."""

from __future__ import annotations

import argparse
import sys

from PySide6.QtWidgets import QApplication

from testgenie.constants.network_constants import (
    DEFAULT_API_URL,
    DEV_SERVER_API_PREFIX,
    DEV_SERVER_HOST,
    DEV_SERVER_PORT,
    REQUEST_TIMEOUT_SECONDS,
)
from testgenie.core.api_client import QuizApiClient
from testgenie.core.auth_session import AuthSession, default_session_path
from testgenie.core.notifications import Notifier
from testgenie.core.quiz_manager import QuizManager
from testgenie.server.dev_api_server import start_dev_server
from testgenie.ui.main_window import MainWindow
from testgenie.utils.logging_config import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="testgenie", description="TestGenie quiz client")
    parser.add_argument("--api-url", default=None, help=f"API base URL (default: {DEFAULT_API_URL})")
    parser.add_argument(
        "--dev-server",
        action="store_true",
        help="start the in-memory development API and connect to it",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEV_SERVER_PORT,
        help=f"port for --dev-server (default: {DEV_SERVER_PORT})",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Initialize logging, optionally start the dev API, and launch the Qt UI."""
    args = parse_args(sys.argv[1:])
    logger = configure_logging()
    logger.info("Starting TestGenie…")

    api_url = args.api_url or DEFAULT_API_URL
    session_path = default_session_path()
    if args.dev_server:
        start_dev_server(host=DEV_SERVER_HOST, port=args.port)
        api_url = args.api_url or f"http://{DEV_SERVER_HOST}:{args.port}{DEV_SERVER_API_PREFIX}"
        # Dev tokens die with the process; keep them out of the real session file.
        session_path = None
    logger.info("Using API at %s", api_url)

    auth_session = AuthSession(storage_path=session_path)
    api = QuizApiClient(auth_session, base_url=api_url, timeout=REQUEST_TIMEOUT_SECONDS)
    quiz_manager = QuizManager(api, auth_session, Notifier())

    app = QApplication(sys.argv[:1])
    window = MainWindow(quiz_manager=quiz_manager)
    window.show()
    window.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
