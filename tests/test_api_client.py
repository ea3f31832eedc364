from __future__ import annotations

import pytest
import requests

from fakes import CONNECTION_ERROR, FakeHttp, FakeResponse, two_question_payload
from testgenie.core.api_client import QuizApiClient
from testgenie.core.auth_session import AuthSession
from testgenie.core.errors import (
    AlreadyCompletedRace,
    ApiError,
    NetworkError,
    NotFoundError,
    SubmissionError,
    UnauthorizedError,
)
from testgenie.core.models import User
from testgenie.core.schemas import QuizSettings

USER_JSON = {"_id": "u1", "name": "Ada", "email": "ada@example.com"}


def _client(*responses, token="tok-1"):
    expired = []
    auth = AuthSession(on_unauthorized=lambda: expired.append(True))
    if token:
        auth.sign_in(token, User(id="u1", name="Ada", email="ada@example.com"))
    http = FakeHttp(*responses)
    client = QuizApiClient(auth, base_url="http://api.test/", http=http)
    return client, http, auth, expired


def test_requests_carry_bearer_token_and_timeout():
    client, http, _, _ = _client(FakeResponse(200, {"success": True, "data": two_question_payload()}))

    client.get_quiz("quiz-1")

    call = http.last
    assert call["url"] == "http://api.test/quiz/quiz-1"
    assert call["headers"]["Authorization"] == "Bearer tok-1"
    assert call["timeout"] == client.timeout


def test_anonymous_requests_have_no_authorization_header():
    client, http, _, _ = _client(
        FakeResponse(200, {"token": "new", "user": USER_JSON}), token=None
    )

    token, user = client.login("ada@example.com", "secret1")

    assert token == "new"
    assert user.name == "Ada"
    assert "Authorization" not in http.last["headers"]
    assert http.last["json"] == {"email": "ada@example.com", "password": "secret1"}


def test_unauthorized_expires_session_and_notifies_owner():
    client, _, auth, expired = _client(FakeResponse(401, {"message": "Token expired"}))

    with pytest.raises(UnauthorizedError, match="Token expired"):
        client.get_user_quizzes()

    assert auth.token is None
    assert expired == [True]


def test_bad_credentials_do_not_expire_the_session():
    client, _, auth, expired = _client(FakeResponse(401, {"message": "Invalid email or password"}))

    with pytest.raises(UnauthorizedError):
        client.login("ada@example.com", "wrong")

    assert auth.token == "tok-1"
    assert expired == []


def test_missing_quiz_is_reported_as_not_found():
    client, _, _, _ = _client(FakeResponse(404, {"message": "No such document"}))

    with pytest.raises(NotFoundError, match="Quiz not found"):
        client.get_quiz("missing")


def test_connection_failure_becomes_network_error():
    client, _, _, _ = _client(CONNECTION_ERROR)

    with pytest.raises(NetworkError):
        client.get_quiz("quiz-1")


def test_error_message_comes_from_body_or_status():
    client, _, _, _ = _client(
        FakeResponse(500, {"message": "Database unavailable"}),
        FakeResponse(502, None),
    )

    with pytest.raises(ApiError, match="Database unavailable") as first:
        client.get_user_quizzes()
    with pytest.raises(ApiError, match="Request failed with status 502"):
        client.get_user_quizzes()
    assert first.value.status == 500


def test_submit_sends_retake_query_only_when_retaking():
    result_body = {"quiz": two_question_payload(completed=True), "score": 50}
    client, http, _, _ = _client(FakeResponse(200, result_body), FakeResponse(200, result_body))

    client.submit_quiz("quiz-1", ["q1-b", "q2-b"], 30)
    assert http.last["params"] is None
    client.submit_quiz("quiz-1", ["q1-a", "q2-b"], 12, retake=True)
    assert http.last["params"] == {"retake": "true"}
    assert http.last["json"] == {"answers": ["q1-a", "q2-b"], "completionTime": 12}


def test_submit_already_completed_is_a_race():
    client, _, _, _ = _client(FakeResponse(400, {"message": "Quiz already completed"}))

    with pytest.raises(AlreadyCompletedRace):
        client.submit_quiz("quiz-1", ["q1-a", "q2-b"], 5)


def test_other_submit_failures_are_submission_errors():
    client, _, _, _ = _client(FakeResponse(400, {"message": "Answers missing"}))

    with pytest.raises(SubmissionError, match="Error: Answers missing"):
        client.submit_quiz("quiz-1", [], 5)


def test_submit_unauthorized_is_not_rewrapped():
    client, _, _, expired = _client(FakeResponse(401, {"message": "Token expired"}))

    with pytest.raises(UnauthorizedError):
        client.submit_quiz("quiz-1", ["q1-a", "q2-b"], 5)
    assert expired == [True]


def test_envelope_is_unwrapped_for_current_user():
    client, _, _, _ = _client(FakeResponse(200, {"success": True, "data": USER_JSON}))

    assert client.get_current_user().email == "ada@example.com"


def test_generate_requires_success_envelope():
    settings = QuizSettings(subject="Database Systems", num_questions=5, title="DB")
    client, http, _, _ = _client(
        FakeResponse(201, {"success": True, "data": {"_id": "new", "title": "DB", "questions": 5}}),
        FakeResponse(201, {"success": False}),
    )

    quiz = client.generate_quiz(settings)
    assert quiz.id == "new"
    assert quiz.total_questions == 5
    assert http.last["json"] == {"subject": "Database Systems", "numQuestions": 5, "title": "DB"}

    with pytest.raises(ApiError, match="Invalid response format"):
        client.generate_basic_quiz(settings)
    assert http.last["url"] == "http://api.test/quiz/generate-basic"


def test_leaderboard_requires_success_flag():
    client, _, _, _ = _client(
        FakeResponse(200, {"success": True, "data": [{"_id": "u1", "userName": "Ada"}]}),
        FakeResponse(200, [{"_id": "u1"}]),
    )

    assert [entry.user_name for entry in client.get_leaderboard()] == ["Ada"]
    with pytest.raises(ApiError, match="Invalid leaderboard data format"):
        client.get_leaderboard()


def test_empty_body_is_none():
    client, _, _, _ = _client(FakeResponse(204, None))

    client.delete_quiz("quiz-1")


@pytest.mark.parametrize(
    "failure",
    [
        requests.exceptions.InvalidURL("Invalid URL"),
        requests.exceptions.MissingSchema("No scheme supplied"),
        requests.exceptions.TooManyRedirects("Exceeded 30 redirects"),
        requests.exceptions.ChunkedEncodingError("Connection broken"),
    ],
)
def test_unsendable_requests_become_network_errors(failure):
    client, _, auth, _ = _client(failure)

    with pytest.raises(NetworkError, match="failed"):
        client.get_user_quizzes()
    assert auth.token == "tok-1"


def test_submit_response_without_quiz_is_accepted():
    client, _, _, _ = _client(FakeResponse(200, {"score": 75, "totalQuestions": 4}))

    result = client.submit_quiz("quiz-1", ["a", "b", "c", "d"], 9)

    assert result.quiz is None
    assert result.score == 75.0
    assert result.time_taken == 9
