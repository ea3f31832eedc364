from __future__ import annotations

import pytest
import requests

from fakes import (
    FakeHttp,
    FakeQuizApi,
    FakeResponse,
    ManualClock,
    RecordingNavigator,
    RecordingNotifier,
    make_quiz,
    two_question_payload,
)
from testgenie.constants.ui_constants import ALREADY_COMPLETED_INFO
from testgenie.core.api_client import QuizApiClient
from testgenie.core.auth_session import AuthSession
from testgenie.core.errors import (
    AlreadyCompletedRace,
    NetworkError,
    NotFoundError,
    SubmissionError,
    UnauthorizedError,
)
from testgenie.core.models import SubmissionResult
from testgenie.core.quiz_parser import parse_quiz_for_taking
from testgenie.core.routes import Route, Screen
from testgenie.core.services.take_session import OptionState, SessionState
from testgenie.core.take_quiz_controller import TakeQuizController


def _controller(api, clock=None):
    notifier = RecordingNotifier()
    navigator = RecordingNavigator()
    controller = TakeQuizController(api, notifier, navigator, clock=clock or ManualClock())
    return controller, notifier, navigator


def _loaded(quiz=None, retake=False, clock=None):
    api = FakeQuizApi(quiz or make_quiz())
    controller, notifier, navigator = _controller(api, clock)
    controller.load("quiz-1", retake=retake)
    return controller, api, notifier, navigator


def _answer_all(controller, choice=0):
    session = controller.session
    for index in range(session.question_count):
        controller.select_option(choice)
        if index < session.question_count - 1:
            controller.go_next()


def test_two_question_scenario_submits_option_ids_and_adopts_server_score():
    http = FakeHttp(
        FakeResponse(200, {"success": True, "data": two_question_payload()}),
        FakeResponse(
            200,
            {
                "quiz": two_question_payload(completed=True),
                "score": 50,
                "correctAnswers": 1,
                "totalQuestions": 2,
                "timeTaken": 42,
            },
        ),
    )
    api = QuizApiClient(AuthSession(), base_url="http://api.test", http=http)
    clock = ManualClock()
    controller, notifier, navigator = _controller(api, clock)

    controller.load("quiz-1")
    assert controller.state == SessionState.READY
    loaded = controller.session.quiz
    assert all(option.is_correct is None for q in loaded.questions for option in q.options)

    assert controller.select_option(1)  # wrong pick for q1
    assert controller.option_states() == [OptionState.NEUTRAL, OptionState.SELECTED]
    assert controller.go_next()
    assert controller.select_option(1)  # correct pick for q2
    assert controller.state == SessionState.ALL_ANSWERED

    clock.advance(42.7)
    assert controller.finish()

    submit_call = http.last
    assert submit_call["method"] == "POST"
    assert submit_call["url"] == "http://api.test/quiz/quiz-1/submit"
    assert submit_call["json"] == {"answers": ["q1-b", "q2-b"], "completionTime": 42}
    assert submit_call["params"] is None

    assert controller.state == SessionState.COMPLETED
    assert controller.session.score == 50
    assert controller.session.quiz.is_completed
    assert controller.option_states() == [OptionState.NEUTRAL, OptionState.CORRECT]
    assert controller.last_result.time_taken == 42
    assert navigator.last == Route(Screen.QUIZ_RESULTS, "quiz-1")
    assert notifier.of_kind("success") == ["Quiz completed! Your score: 50.0%"]


def test_null_questions_fail_load_with_one_error_and_redirect():
    http = FakeHttp(FakeResponse(200, {"success": True, "data": two_question_payload(questions=None)}))
    api = QuizApiClient(AuthSession(), base_url="http://api.test", http=http)
    controller, notifier, navigator = _controller(api)

    controller.load("X")

    assert controller.state == SessionState.ERROR
    assert controller.session is None
    assert notifier.of_kind("error") == ["Invalid quiz data received"]
    assert navigator.routes == [Route(Screen.DASHBOARD)]
    assert not controller.timer.has_started


def test_load_without_id_fails_without_fetching():
    api = FakeQuizApi(make_quiz())
    controller, notifier, navigator = _controller(api)

    controller.load(None)

    assert api.fetches == []
    assert notifier.of_kind("error") == ["Quiz ID is required"]
    assert navigator.routes == [Route(Screen.DASHBOARD)]


def test_quiz_without_questions_is_a_load_error():
    controller, _, notifier, navigator = _loaded(make_quiz(question_count=0))

    assert controller.state == SessionState.ERROR
    assert notifier.of_kind("error") == ["Quiz has no questions"]
    assert navigator.last == Route(Screen.DASHBOARD)


def test_not_found_is_reported_once():
    controller, _, notifier, navigator = _loaded(NotFoundError(404, "Quiz not found"))

    assert controller.state == SessionState.ERROR
    assert notifier.of_kind("error") == ["Quiz not found"]
    assert navigator.routes == [Route(Screen.DASHBOARD)]


def test_unauthorized_load_leaves_navigation_to_the_session_owner():
    controller, _, notifier, navigator = _loaded(UnauthorizedError(401, "Not authorized"))

    assert controller.state == SessionState.ERROR
    assert notifier.messages == []
    assert navigator.routes == []


def test_previous_on_first_question_is_a_noop():
    controller, *_ = _loaded()

    assert not controller.can_go_previous()
    assert controller.go_previous() is False
    assert controller.session.current_index == 0


def test_next_requires_reveal():
    controller, *_ = _loaded()

    assert not controller.can_go_next()
    assert controller.go_next() is False
    controller.select_option(0)
    assert controller.can_go_next()
    assert controller.go_next()
    assert controller.session.current_index == 1


def test_next_on_last_question_is_a_noop():
    controller, *_ = _loaded(make_quiz(question_count=2))
    _answer_all(controller)

    assert controller.session.current_index == 1
    assert controller.go_next() is False
    assert controller.session.current_index == 1


def test_reveal_is_monotonic_and_locks_the_choice():
    controller, *_ = _loaded(make_quiz(question_count=2, option_count=3))

    assert controller.select_option(2)
    assert controller.select_option(0) is False
    assert controller.session.selections[0] == 2

    controller.go_next()
    controller.go_previous()
    assert controller.session.is_revealed(0)
    assert controller.session.selections[0] == 2


def test_can_finish_tracks_every_slot_being_answered():
    controller, *_ = _loaded(make_quiz(question_count=3))

    assert not controller.can_finish()
    controller.select_option(0)
    controller.go_next()
    controller.select_option(1)
    assert not controller.can_finish()
    assert controller.finish() is False
    controller.go_next()
    controller.select_option(0)

    assert controller.can_finish()
    assert controller.can_finish() == all(s != -1 for s in controller.session.selections)


def test_retake_clears_completion_data_whatever_the_server_sent():
    completed = parse_quiz_for_taking(two_question_payload(completed=True))
    controller, api, notifier, _ = _loaded(completed, retake=True)

    quiz = controller.session.quiz
    assert controller.state == SessionState.READY
    assert quiz.is_completed is False
    assert quiz.score is None
    assert quiz.user_answers is None
    assert quiz.completion_time is None
    assert controller.timer.is_running
    assert notifier.messages == []


def test_retake_flag_is_sent_with_the_submission():
    completed = parse_quiz_for_taking(two_question_payload(completed=True))
    controller, api, _, _ = _loaded(completed, retake=True)
    api.submit_result = SubmissionResult(
        quiz=parse_quiz_for_taking(two_question_payload(completed=True)),
        score=100.0,
        correct_answers=2,
        total_questions=2,
        time_taken=5,
        feedback="",
    )
    controller.select_option(0)
    controller.go_next()
    controller.select_option(1)

    assert controller.finish()
    assert api.submissions[0]["retake"] is True
    assert api.submissions[0]["answers"] == ["q1-a", "q2-b"]


def test_completed_quiz_without_retake_opens_in_completed_state():
    completed = parse_quiz_for_taking(two_question_payload(completed=True))
    controller, _, notifier, navigator = _loaded(completed)

    assert controller.state == SessionState.COMPLETED
    assert notifier.of_kind("info") == [ALREADY_COMPLETED_INFO]
    assert controller.displayed_seconds == 42
    assert controller.select_option(0) is False
    assert not controller.timer.has_started
    assert navigator.routes == []


def test_already_completed_race_is_treated_like_success():
    controller, api, notifier, navigator = _loaded()
    api.submit_result = AlreadyCompletedRace("Quiz already completed")
    _answer_all(controller)

    assert controller.finish()

    assert controller.state == SessionState.COMPLETED
    assert navigator.last == Route(Screen.QUIZ_RESULTS, "quiz-1")
    assert notifier.of_kind("error") == []
    assert notifier.of_kind("info") == [ALREADY_COMPLETED_INFO]
    assert not controller.timer.is_running


@pytest.mark.parametrize(
    "failure, message",
    [
        (SubmissionError("Error: Internal server error"), "Error: Internal server error"),
        (NetworkError("Network error. Please check your connection and try again."),
         "Network error. Please check your connection and try again."),
    ],
)
def test_other_submission_failures_keep_answers_for_a_retry(failure, message):
    controller, api, notifier, navigator = _loaded()
    api.submit_result = failure
    _answer_all(controller, choice=1)

    assert controller.finish() is False

    assert controller.state == SessionState.ALL_ANSWERED
    assert controller.session.selections == [1, 1]
    assert notifier.of_kind("error") == [message]
    assert navigator.routes == []
    assert controller.can_finish()


def test_unauthorized_submission_is_not_notified_twice():
    controller, api, notifier, _ = _loaded()
    api.submit_result = UnauthorizedError(401, "Token expired")
    _answer_all(controller)

    assert controller.finish() is False
    assert controller.state == SessionState.ALL_ANSWERED
    assert notifier.messages == []


def test_timer_starts_on_ready_and_freezes_on_completion():
    clock = ManualClock()
    controller, api, _, _ = _loaded(clock=clock)
    api.submit_result = SubmissionResult(
        quiz=make_quiz(is_completed=True, score=100.0),
        score=100.0,
        correct_answers=2,
        total_questions=2,
        time_taken=7,
        feedback="",
    )

    clock.advance(3.9)
    assert controller.tick() == 3
    _answer_all(controller)
    clock.advance(3.2)
    assert controller.finish()
    assert api.submissions[0]["completion_time"] == 7

    clock.advance(100)
    assert controller.tick() == 7
    assert controller.displayed_seconds == 7


def test_late_submission_result_after_close_is_ignored():
    controller, api, notifier, navigator = _loaded()
    api.submit_result = SubmissionResult(
        quiz=make_quiz(is_completed=True, score=50.0),
        score=50.0,
        correct_answers=1,
        total_questions=2,
        time_taken=1,
        feedback="",
    )
    _answer_all(controller)

    controller.close()
    assert not controller.timer.is_running
    assert controller.finish() is False
    assert navigator.routes == []
    assert notifier.of_kind("success") == []


def test_try_again_and_view_results_navigate():
    controller, _, _, navigator = _loaded()

    controller.try_again()
    controller.view_results()

    assert navigator.routes == [
        Route(Screen.TAKE_QUIZ, "quiz-1", retake=True),
        Route(Screen.QUIZ_RESULTS, "quiz-1"),
    ]


def _wire_controller(*responses):
    http = FakeHttp(FakeResponse(200, {"success": True, "data": two_question_payload()}), *responses)
    api = QuizApiClient(AuthSession(), base_url="http://api.test", http=http)
    controller, notifier, navigator = _controller(api)
    controller.load("quiz-1")
    _answer_all(controller, choice=1)
    return controller, notifier, navigator


def test_scored_quiz_without_id_is_adopted_under_the_local_id():
    scored = two_question_payload(completed=True)
    del scored["_id"]
    controller, notifier, navigator = _wire_controller(FakeResponse(200, {"quiz": scored, "score": 50}))

    assert controller.finish()

    assert controller.state == SessionState.COMPLETED
    assert controller.session.quiz.id == "quiz-1"
    assert controller.session.quiz.is_completed
    assert navigator.last == Route(Screen.QUIZ_RESULTS, "quiz-1")


def test_malformed_submit_response_leaves_answers_retryable():
    broken = two_question_payload(completed=True, attempts="many")
    controller, notifier, navigator = _wire_controller(FakeResponse(200, {"quiz": broken, "score": 50}))

    assert controller.finish() is False

    assert controller.state == SessionState.ALL_ANSWERED
    assert controller.can_finish()
    assert notifier.of_kind("error") == ["Invalid response from server"]
    assert navigator.routes == []


def test_unexpected_submit_exception_restores_all_answered():
    controller, api, _, navigator = _loaded()
    api.submit_result = RuntimeError("boom")
    _answer_all(controller)

    with pytest.raises(RuntimeError):
        controller.finish()

    assert controller.state == SessionState.ALL_ANSWERED
    assert controller.can_finish()
    assert navigator.routes == []


def test_accepted_submission_without_quiz_completes_with_sent_score():
    controller, notifier, navigator = _wire_controller(
        FakeResponse(200, {"score": 50, "correctAnswers": 1, "totalQuestions": 2})
    )

    assert controller.finish()

    assert controller.state == SessionState.COMPLETED
    assert controller.session.quiz.is_completed
    assert controller.session.score == 50.0
    assert notifier.of_kind("error") == []
    assert notifier.of_kind("success") == ["Quiz completed! Your score: 50.0%"]
    assert navigator.last == Route(Screen.QUIZ_RESULTS, "quiz-1")


def test_accepted_submission_without_quiz_or_score():
    controller, notifier, navigator = _wire_controller(FakeResponse(200, {"feedback": "Thanks"}))

    assert controller.finish()

    assert controller.state == SessionState.COMPLETED
    assert controller.session.score is None
    assert notifier.of_kind("success") == ["Quiz completed!"]
    assert navigator.last == Route(Screen.QUIZ_RESULTS, "quiz-1")


def test_request_that_cannot_be_sent_fails_load_once():
    http = FakeHttp(requests.exceptions.InvalidURL("Invalid URL 'api.test/quiz/quiz-1'"))
    api = QuizApiClient(AuthSession(), base_url="api.test", http=http)
    controller, notifier, navigator = _controller(api)

    controller.load("quiz-1")

    assert controller.state == SessionState.ERROR
    assert len(notifier.of_kind("error")) == 1
    assert navigator.routes == [Route(Screen.DASHBOARD)]


def test_finish_before_any_quiz_is_loaded_does_nothing():
    api = FakeQuizApi(make_quiz())
    controller, notifier, navigator = _controller(api)

    assert controller.finish() is False
    assert api.submissions == []
    assert notifier.messages == []
    assert navigator.routes == []
