"""Elapsed-time tracking for a take-quiz session."""

from __future__ import annotations

import math
import time
from typing import Callable


class ElapsedTimer:
    """Measures whole seconds since :meth:`start` from a captured timestamp.

    Each reading is computed from ``clock() - started_at`` rather than by
    counting ticks, so late or skipped timer callbacks do not drift.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: float | None = None
        self._stopped_at: float | None = None

    def start(self) -> None:
        self._started_at = self._clock()
        self._stopped_at = None

    def stop(self) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._clock()

    def reset(self) -> None:
        self._started_at = None
        self._stopped_at = None

    @property
    def is_running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def has_started(self) -> bool:
        return self._started_at is not None

    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return max(0, math.floor(end - self._started_at))
