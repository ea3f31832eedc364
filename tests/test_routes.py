from __future__ import annotations

import pytest

from testgenie.core.routes import Route, Screen, guard


@pytest.mark.parametrize(
    "screen",
    [Screen.DASHBOARD, Screen.CREATE_QUIZ, Screen.LEADERBOARD, Screen.PROFILE],
)
def test_private_screens_require_login(screen):
    assert guard(Route(screen), is_authenticated=False) == Route(Screen.LOGIN)
    assert guard(Route(screen), is_authenticated=True) == Route(screen)


def test_signed_in_users_skip_login_and_register():
    assert guard(Route(Screen.LOGIN), True) == Route(Screen.DASHBOARD)
    assert guard(Route(Screen.REGISTER), True) == Route(Screen.DASHBOARD)
    assert guard(Route(Screen.REGISTER), False) == Route(Screen.REGISTER)


def test_quiz_screens_need_an_id():
    assert guard(Route(Screen.TAKE_QUIZ), True) == Route(Screen.DASHBOARD)
    assert guard(Route(Screen.QUIZ_RESULTS, ""), True) == Route(Screen.DASHBOARD)
    retake = Route(Screen.TAKE_QUIZ, "quiz-1", retake=True)
    assert guard(retake, True) is retake


def test_not_found_is_public():
    assert guard(Route(Screen.NOT_FOUND), False) == Route(Screen.NOT_FOUND)
