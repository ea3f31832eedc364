from __future__ import annotations

import pytest

from fakes import FakeHttp, FakeResponse, RecordingNotifier, two_question_payload
from testgenie.core.api_client import QuizApiClient
from testgenie.core.auth_session import AuthSession
from testgenie.core.errors import ApiError, ValidationError
from testgenie.core.models import User
from testgenie.core.quiz_manager import QuizManager

USER_JSON = {"_id": "u1", "name": "Ada", "email": "ada@example.com"}
CREATED = {"success": True, "data": {"_id": "new", "title": "DB quiz", "questions": 10}}


def _manager(*responses, signed_in=True):
    auth = AuthSession()
    if signed_in:
        auth.sign_in("tok", User(id="u1", name="Ada", email="ada@example.com"))
    http = FakeHttp(*responses)
    notifier = RecordingNotifier()
    manager = QuizManager(QuizApiClient(auth, base_url="http://api.test", http=http), auth, notifier)
    return manager, http, notifier


def _create(manager):
    return manager.create_quiz("DB quiz", "subject", "Database Systems", "", 10, "medium")


def test_quota_error_falls_back_to_basic_generation():
    manager, http, notifier = _manager(
        FakeResponse(429, {"message": "AI generation quota exceeded"}),
        FakeResponse(201, CREATED),
    )

    quiz = _create(manager)

    assert quiz.id == "new"
    assert [call["url"] for call in http.calls] == [
        "http://api.test/quiz/generate",
        "http://api.test/quiz/generate-basic",
    ]
    assert notifier.of_kind("info") == ["AI quota exceeded. Using basic questions instead."]
    assert notifier.of_kind("success") == ["Quiz created successfully!"]


def test_rate_limit_message_also_falls_back():
    manager, http, _ = _manager(
        FakeResponse(503, {"message": "Rate limit reached"}),
        FakeResponse(201, CREATED),
    )

    _create(manager)

    assert len(http.calls) == 2


def test_other_generation_errors_propagate():
    manager, http, notifier = _manager(FakeResponse(500, {"message": "Model crashed"}))

    with pytest.raises(ApiError, match="Model crashed"):
        _create(manager)

    assert len(http.calls) == 1
    assert notifier.messages == []


def test_invalid_form_never_reaches_the_server():
    manager, http, _ = _manager()

    with pytest.raises(ValidationError):
        manager.create_quiz("", "custom", "", "", 10, "medium")

    assert http.calls == []


def test_generation_request_uses_chosen_subject():
    manager, http, _ = _manager(FakeResponse(201, CREATED))

    manager.create_quiz("Rust basics", "custom", "", " Rust ", 5, "easy")

    assert http.last["json"] == {
        "title": "Rust basics",
        "subject": "Rust",
        "numQuestions": 5,
        "difficulty": "easy",
    }


def test_results_only_for_completed_quizzes():
    manager, _, _ = _manager(
        FakeResponse(200, {"success": True, "data": two_question_payload(completed=True)}),
        FakeResponse(200, {"success": True, "data": two_question_payload()}),
    )

    assert manager.load_results("quiz-1").score == 50.0
    assert manager.load_results("quiz-1") is None


def test_restore_without_token_makes_no_request():
    manager, http, _ = _manager(signed_in=False)

    assert manager.restore_session() is False
    assert http.calls == []


def test_restore_refreshes_user():
    manager, _, _ = _manager(
        FakeResponse(200, {"success": True, "data": {**USER_JSON, "name": "Ada L."}})
    )

    assert manager.restore_session()
    assert manager.auth.user.name == "Ada L."


def test_restore_failure_signs_out():
    manager, _, _ = _manager(FakeResponse(500, {"message": "down"}))

    assert manager.restore_session() is False
    assert not manager.auth.has_token()


def test_login_signs_in_and_greets():
    manager, http, notifier = _manager(
        FakeResponse(200, {"token": "fresh", "user": USER_JSON}), signed_in=False
    )

    manager.login(" ada@example.com ", "secret1")

    assert manager.auth.token == "fresh"
    assert http.last["json"]["email"] == "ada@example.com"
    assert notifier.of_kind("success") == ["Welcome back, Ada!"]


def test_profile_update_sends_password_change_only_when_complete():
    manager, http, _ = _manager(
        FakeResponse(200, {"success": True, "data": USER_JSON}),
        FakeResponse(200, {"success": True, "data": USER_JSON}),
    )

    manager.update_profile("Ada", "ada@example.com")
    assert http.last["json"] == {"name": "Ada", "email": "ada@example.com"}
    manager.update_profile("Ada", "ada@example.com", "old-pass", "new-pass", "new-pass")
    assert http.last["json"]["currentPassword"] == "old-pass"
    assert http.last["json"]["newPassword"] == "new-pass"


def test_leaderboard_is_ranked():
    manager, _, _ = _manager(
        FakeResponse(
            200,
            {"success": True, "data": [{"_id": "u2", "userName": "Bo"}, {"_id": "u1", "userName": "Ada"}]},
        )
    )

    ranked = manager.load_leaderboard()

    assert [(row.rank, row.name) for row in ranked] == [(1, "Bo"), (2, "Ada")]


def test_switching_api_url_signs_out():
    manager, _, _ = _manager()
    timeout = manager.api.timeout

    manager.use_api_url("http://other.test/api/")

    assert not manager.auth.has_token()
    assert manager.api.base_url == "http://other.test/api"
    assert manager.api.timeout == timeout
