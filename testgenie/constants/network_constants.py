"""Network configuration constants for the quiz client."""

import os

DEFAULT_API_URL: str = os.environ.get("TESTGENIE_API_URL", "http://localhost:5000/api")
REQUEST_TIMEOUT_SECONDS: float = float(os.environ.get("TESTGENIE_TIMEOUT", "10"))

DEV_SERVER_HOST: str = "127.0.0.1"
DEV_SERVER_PORT: int = 5000
DEV_SERVER_API_PREFIX: str = "/api"
