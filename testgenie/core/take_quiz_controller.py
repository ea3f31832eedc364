"""Controller driving a single take-quiz session from load to completion."""

from __future__ import annotations

import logging
import time
from typing import Callable

from testgenie.constants.ui_constants import ALREADY_COMPLETED_INFO
from testgenie.core.api_client import QuizApiClient
from testgenie.core.errors import (
    AlreadyCompletedRace,
    ApiError,
    LoadError,
    NetworkError,
    SubmissionError,
    UnauthorizedError,
)
from testgenie.core.models import Quiz, SubmissionResult
from testgenie.core.notifications import Notifier
from testgenie.core.routes import Route, Screen
from testgenie.core.services.elapsed_timer import ElapsedTimer
from testgenie.core.services.submission_reconciler import (
    build_answer_ids,
    prepare_retake,
)
from testgenie.core.services.take_session import OptionState, SessionState, TakeSession

logger = logging.getLogger(__name__)

_ANSWERING_STATES = (SessionState.READY, SessionState.ALL_ANSWERED)


class TakeQuizController:
    """Owns the session, the elapsed timer and the submission round-trip.

    The controller never scores anything: after a successful submission the
    server's quiz replaces the local copy. ``navigate`` and ``notifier`` are
    the only ways it reaches the UI.
    """

    def __init__(
        self,
        api: QuizApiClient,
        notifier: Notifier,
        navigate: Callable[[Route], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api = api
        self._notifier = notifier
        self._navigate = navigate
        self.timer = ElapsedTimer(clock)
        self.state = SessionState.LOADING
        self.session: TakeSession | None = None
        self.quiz_id: str | None = None
        self.retake = False
        self.last_result: SubmissionResult | None = None
        self._displayed_seconds = 0
        self._closed = False

    def use_api(self, api: QuizApiClient) -> None:
        self._api = api

    # --- Loading ---

    def load(self, quiz_id: str | None, retake: bool = False) -> None:
        self.state = SessionState.LOADING
        self.session = None
        self.quiz_id = quiz_id
        self.retake = retake
        self.last_result = None
        self._displayed_seconds = 0
        self._closed = False
        self.timer.reset()

        if not quiz_id:
            self._fail_load("Quiz ID is required")
            return

        logger.info("Loading quiz %s (retake=%s)", quiz_id, retake)
        try:
            quiz = self._api.get_quiz(quiz_id)
            if not quiz.questions:
                raise LoadError("Quiz has no questions")
        except UnauthorizedError:
            self.state = SessionState.ERROR
            return
        except (LoadError, ApiError, NetworkError) as exc:
            self._fail_load(str(exc) or "Failed to load quiz. Please try again.")
            return

        if self._closed:
            return

        if quiz.is_completed and not retake:
            logger.info("Quiz %s already completed; showing stored result", quiz_id)
            self._notifier.info(ALREADY_COMPLETED_INFO)
            self.session = TakeSession(quiz)
            self._displayed_seconds = quiz.completion_time or 0
            self.state = SessionState.COMPLETED
            return

        if retake:
            prepare_retake(quiz)
        else:
            _hide_correctness(quiz)

        self.session = TakeSession(quiz)
        self.state = SessionState.READY
        self.timer.start()

    def _fail_load(self, message: str) -> None:
        logger.error("Quiz load failed: %s", message)
        self.state = SessionState.ERROR
        self._notifier.error(message)
        self._navigate(Route(Screen.DASHBOARD))

    # --- Answering ---

    def select_option(self, option_index: int) -> bool:
        if self.session is None or self.state not in _ANSWERING_STATES:
            return False
        question_index = self.session.current_index
        if not self.session.select_option(question_index, option_index):
            return False
        logger.info("Question %d answered with option %d", question_index + 1, option_index)
        if self.session.all_answered():
            self.state = SessionState.ALL_ANSWERED
        return True

    def go_next(self) -> bool:
        if self.session is None or self.state not in _ANSWERING_STATES:
            return False
        return self.session.go_next()

    def go_previous(self) -> bool:
        if self.session is None or self.state not in _ANSWERING_STATES:
            return False
        return self.session.go_previous()

    def can_go_next(self) -> bool:
        return self.session is not None and self.state in _ANSWERING_STATES and self.session.can_go_next()

    def can_go_previous(self) -> bool:
        return (
            self.session is not None
            and self.state in _ANSWERING_STATES
            and self.session.can_go_previous()
        )

    def can_finish(self) -> bool:
        return (
            self.session is not None
            and self.state == SessionState.ALL_ANSWERED
            and self.session.all_answered()
        )

    def option_states(self) -> list[OptionState]:
        if self.session is None:
            return []
        return self.session.option_states(self.session.current_index)

    # --- Submission ---

    def finish(self) -> bool:
        """Submit the answers; returns True once the session is completed."""
        session = self.session
        if session is None or not self.can_finish():
            return False
        answers = build_answer_ids(session.quiz, session.selections)
        completion_time = self.timer.elapsed_seconds()
        self.state = SessionState.SUBMITTING
        logger.info(
            "Submitting quiz %s: %d answers in %ss (retake=%s)",
            session.quiz.id,
            len(answers),
            completion_time,
            self.retake,
        )

        try:
            result = self._api.submit_quiz(session.quiz.id, answers, completion_time, self.retake)
        except UnauthorizedError:
            self.state = SessionState.ALL_ANSWERED
            return False
        except AlreadyCompletedRace:
            self._complete_after_race()
            return True
        except (NetworkError, SubmissionError) as exc:
            self._fail_submission(str(exc) or "Failed to submit quiz. Please try again.")
            return False
        except ApiError as exc:
            self._fail_submission(f"Error: {exc.message or 'Failed to submit quiz'}")
            return False
        except Exception:
            self.state = SessionState.ALL_ANSWERED
            raise

        if self._closed:
            return False

        if result.quiz is not None:
            session.replace_quiz(result.quiz, result.score)
        else:
            logger.warning("Submission of quiz %s accepted without a scored quiz", session.quiz.id)
            session.quiz.is_completed = True
            session.score = result.score
        self.last_result = result
        self._complete()
        if result.score is None:
            self._notifier.success("Quiz completed!")
        else:
            self._notifier.success(f"Quiz completed! Your score: {result.score:.1f}%")
        self._navigate(Route(Screen.QUIZ_RESULTS, session.quiz.id))
        return True

    def _complete(self) -> None:
        self._displayed_seconds = self.timer.elapsed_seconds()
        self.timer.stop()
        self.state = SessionState.COMPLETED

    def _complete_after_race(self) -> None:
        logger.info("Quiz %s was already completed on the server", self.quiz_id)
        if self._closed:
            return
        self._complete()
        self._notifier.info(ALREADY_COMPLETED_INFO)
        self._navigate(Route(Screen.QUIZ_RESULTS, self.quiz_id))

    def _fail_submission(self, message: str) -> None:
        logger.error("Submission failed: %s", message)
        self.state = SessionState.ALL_ANSWERED
        self._notifier.error(message)

    # --- Timer and lifecycle ---

    def tick(self) -> int:
        """Refresh and return the displayed elapsed seconds."""
        if self.state in (*_ANSWERING_STATES, SessionState.SUBMITTING) and self.timer.is_running:
            self._displayed_seconds = self.timer.elapsed_seconds()
        return self._displayed_seconds

    @property
    def displayed_seconds(self) -> int:
        return self._displayed_seconds

    def try_again(self) -> None:
        if self.quiz_id:
            self._navigate(Route(Screen.TAKE_QUIZ, self.quiz_id, retake=True))

    def view_results(self) -> None:
        if self.quiz_id:
            self._navigate(Route(Screen.QUIZ_RESULTS, self.quiz_id))

    def close(self) -> None:
        """Tear down when the user leaves; later responses are ignored."""
        self._closed = True
        self.timer.stop()


def _hide_correctness(quiz: Quiz) -> None:
    for question in quiz.questions:
        for option in question.options:
            option.is_correct = None
