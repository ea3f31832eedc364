"""Display formatting helpers shared by the panels."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from testgenie.constants.quiz_constants import SCORE_FAIR_THRESHOLD, SCORE_GOOD_THRESHOLD


class ScoreBand(Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def format_time(seconds: float | None, empty: str = "00:00") -> str:
    """Format seconds as ``MM:SS``; missing or invalid values give ``empty``."""
    if not seconds or seconds != seconds or seconds < 0:
        return empty
    total = int(seconds)
    minutes, remaining = divmod(total, 60)
    return f"{minutes:02d}:{remaining:02d}"


def score_band(score: float | None) -> ScoreBand:
    value = score or 0
    if value >= SCORE_GOOD_THRESHOLD:
        return ScoreBand.GOOD
    if value >= SCORE_FAIR_THRESHOLD:
        return ScoreBand.FAIR
    return ScoreBand.POOR


def score_message(score: float | None) -> str:
    value = score or 0
    if value >= 80:
        return "Excellent!"
    if value >= 60:
        return "Good job!"
    if value >= 40:
        return "Not bad!"
    return "Keep practicing!"


def format_date(iso_timestamp: str | None) -> str:
    """Render an ISO timestamp as e.g. ``Mar 4, 2025``."""
    if not iso_timestamp:
        return ""
    try:
        parsed = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
