from __future__ import annotations

import pytest

from fakes import make_quiz, two_question_payload
from testgenie.constants.quiz_constants import UNANSWERED
from testgenie.core.quiz_parser import parse_quiz_for_taking
from testgenie.core.services.take_session import OptionState, TakeSession


def test_new_session_starts_unanswered_on_first_question():
    session = TakeSession(make_quiz(question_count=3))

    assert session.current_index == 0
    assert session.selections == [UNANSWERED] * 3
    assert session.answered_count() == 0
    assert not session.all_answered()
    assert not any(session.is_revealed(i) for i in range(3))


def test_empty_quiz_is_rejected():
    with pytest.raises(ValueError):
        TakeSession(make_quiz(question_count=0))


def test_selection_reveals_and_locks_question():
    session = TakeSession(make_quiz(option_count=4))

    assert session.select_option(0, 3)
    assert session.current_revealed
    assert session.select_option(0, 1) is False
    assert session.selections[0] == 3


def test_selection_only_on_current_question():
    session = TakeSession(make_quiz())

    with pytest.raises(ValueError):
        session.select_option(1, 0)


def test_selection_out_of_range():
    session = TakeSession(make_quiz(option_count=2))

    with pytest.raises(IndexError):
        session.select_option(0, 2)
    with pytest.raises(IndexError):
        session.select_option(0, -1)
    assert not session.current_revealed


def test_navigation_bounds():
    session = TakeSession(make_quiz(question_count=2))

    assert session.go_previous() is False
    assert session.go_next() is False
    session.select_option(0, 0)
    assert session.go_next()
    assert session.go_next() is False
    assert session.go_previous()
    assert session.current_index == 0


def test_option_states_with_hidden_correctness():
    session = TakeSession(make_quiz(option_count=3))

    assert session.option_states(0) == [OptionState.NEUTRAL] * 3
    session.select_option(0, 1)
    assert session.option_states(0) == [
        OptionState.NEUTRAL,
        OptionState.SELECTED,
        OptionState.NEUTRAL,
    ]


def test_option_states_with_known_correctness():
    quiz = parse_quiz_for_taking(two_question_payload(completed=True))
    session = TakeSession(quiz)

    session.select_option(0, 1)
    assert session.option_states(0) == [OptionState.CORRECT, OptionState.INCORRECT]

    session.go_next()
    session.select_option(1, 1)
    assert session.option_states(1) == [OptionState.NEUTRAL, OptionState.CORRECT]
    assert session.all_answered()


def test_replace_quiz_adopts_server_score():
    session = TakeSession(make_quiz())
    scored = make_quiz(is_completed=True, score=75.0)

    session.replace_quiz(scored, 75.0)

    assert session.quiz is scored
    assert session.score == 75.0
