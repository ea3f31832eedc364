from __future__ import annotations

import pytest

from testgenie.core.formatting import ScoreBand, format_date, format_time, score_band, score_message


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (5, "00:05"), (65, "01:05"), (3599.9, "59:59"), (None, "00:00"), (-3, "00:00")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_format_time_custom_empty_value():
    assert format_time(None, empty="N/A") == "N/A"
    assert format_time(float("nan"), empty="N/A") == "N/A"


@pytest.mark.parametrize(
    "score, band",
    [(100, ScoreBand.GOOD), (70, ScoreBand.GOOD), (69.9, ScoreBand.FAIR), (40, ScoreBand.FAIR),
     (10, ScoreBand.POOR), (None, ScoreBand.POOR)],
)
def test_score_band(score, band):
    assert score_band(score) is band


def test_score_message():
    assert score_message(85) == "Excellent!"
    assert score_message(60) == "Good job!"
    assert score_message(45) == "Not bad!"
    assert score_message(None) == "Keep practicing!"


def test_format_date():
    assert format_date("2025-03-04T10:20:30.000Z") == "Mar 4, 2025"
    assert format_date("") == ""
    assert format_date("yesterday") == "yesterday"
