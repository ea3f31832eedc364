"""Screens, routes and the authentication guard applied before navigating."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Screen(Enum):
    LOGIN = auto()
    REGISTER = auto()
    DASHBOARD = auto()
    CREATE_QUIZ = auto()
    TAKE_QUIZ = auto()
    QUIZ_RESULTS = auto()
    LEADERBOARD = auto()
    PROFILE = auto()
    NOT_FOUND = auto()


PUBLIC_SCREENS = frozenset({Screen.LOGIN, Screen.REGISTER, Screen.NOT_FOUND})
_QUIZ_SCREENS = frozenset({Screen.TAKE_QUIZ, Screen.QUIZ_RESULTS})


@dataclass(frozen=True, slots=True)
class Route:
    screen: Screen
    quiz_id: str | None = None
    retake: bool = False


def guard(route: Route, is_authenticated: bool) -> Route:
    """Return the route that should actually be shown for ``route``."""
    if route.screen not in PUBLIC_SCREENS and not is_authenticated:
        return Route(Screen.LOGIN)
    if route.screen in (Screen.LOGIN, Screen.REGISTER) and is_authenticated:
        return Route(Screen.DASHBOARD)
    if route.screen in _QUIZ_SCREENS and not route.quiz_id:
        return Route(Screen.DASHBOARD)
    return route
