from __future__ import annotations

from fakes import make_quiz, two_question_payload
from testgenie.core.errors import ApiError
from testgenie.core.quiz_parser import parse_quiz_for_taking
from testgenie.core.services.submission_reconciler import (
    build_answer_ids,
    is_already_completed,
    prepare_retake,
)


def test_answers_follow_question_order():
    quiz = make_quiz(question_count=3, option_count=3)

    assert build_answer_ids(quiz, [2, 0, 1]) == ["q1-o2", "q2-o0", "q3-o1"]


def test_unanswered_and_invalid_slots_become_empty_strings():
    quiz = make_quiz(question_count=4, option_count=2)

    assert build_answer_ids(quiz, [-1, 5, 1]) == ["", "", "q3-o1", ""]


def test_option_without_id_is_sent_as_empty_string():
    quiz = make_quiz(question_count=1)
    quiz.questions[0].options[0].id = ""

    assert build_answer_ids(quiz, [0]) == [""]


def test_already_completed_detection():
    assert is_already_completed(ApiError(400, "Quiz already completed"))
    assert is_already_completed(ApiError(400, "You have ALREADY COMPLETED this quiz"))
    assert not is_already_completed(ApiError(500, "Quiz already completed"))
    assert not is_already_completed(ApiError(400, "Invalid answers"))


def test_prepare_retake_clears_completion_fields():
    quiz = parse_quiz_for_taking(two_question_payload(completed=True))

    prepare_retake(quiz)

    assert quiz.is_completed is False
    assert quiz.score is None
    assert quiz.user_answers is None
    assert quiz.completion_time is None
    assert len(quiz.questions) == 2
