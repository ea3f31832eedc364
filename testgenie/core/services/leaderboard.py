"""Service for ranking and paging leaderboard rows on the client."""

from __future__ import annotations

import math
from typing import Generic, Sequence, TypeVar

from testgenie.constants.quiz_constants import LEADERBOARD_PAGE_SIZE
from testgenie.core.models import LeaderboardEntry, RankedUser

T = TypeVar("T")


def rank_entries(entries: Sequence[LeaderboardEntry]) -> list[RankedUser]:
    """Attach 1-based ranks in the order the server returned."""
    return [
        RankedUser(
            id=entry.id,
            name=entry.user_name,
            image_url=entry.user_image,
            score=entry.average_score,
            quizzes_taken=entry.quiz_count,
            avg_completion_time=entry.avg_completion_time or 0,
            rank=position + 1,
        )
        for position, entry in enumerate(entries)
    ]


def find_user_rank(ranked: Sequence[RankedUser], user_id: str | None) -> RankedUser | None:
    if not user_id:
        return None
    return next((row for row in ranked if row.id == user_id), None)


class Paginator(Generic[T]):
    """1-based pagination over an in-memory list."""

    def __init__(self, items: Sequence[T], per_page: int = LEADERBOARD_PAGE_SIZE) -> None:
        if per_page <= 0:
            raise ValueError("Items per page must be a positive integer.")
        self._items = list(items)
        self.per_page = per_page
        self.current_page = 1

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self._items) / self.per_page))

    @property
    def total_items(self) -> int:
        return len(self._items)

    def page(self, page_number: int) -> list[T]:
        self.current_page = min(max(1, page_number), self.page_count)
        return self.current_items()

    def current_items(self) -> list[T]:
        last = self.current_page * self.per_page
        first = last - self.per_page
        return self._items[first:last]

    def has_next(self) -> bool:
        return self.current_page < self.page_count

    def has_previous(self) -> bool:
        return self.current_page > 1
