"""Per-question state for taking a quiz one question at a time."""

from __future__ import annotations

from enum import Enum, auto

from testgenie.constants.quiz_constants import UNANSWERED
from testgenie.core.models import Question, Quiz


class SessionState(Enum):
    """Lifecycle of a take-quiz session."""

    LOADING = auto()
    READY = auto()
    ALL_ANSWERED = auto()
    SUBMITTING = auto()
    COMPLETED = auto()
    ERROR = auto()


class OptionState(Enum):
    """How an option should be drawn."""

    NEUTRAL = auto()
    SELECTED = auto()  # picked, correctness not known on the client
    CORRECT = auto()
    INCORRECT = auto()


class TakeSession:
    """Tracks the current question, chosen option indices and reveal flags.

    Choosing an option reveals the question, and a revealed question is
    locked for the rest of the session. Reveal flags only ever go from False
    to True.
    """

    def __init__(self, quiz: Quiz) -> None:
        if not quiz.questions:
            raise ValueError("Quiz must contain at least one question.")
        self.quiz = quiz
        self.current_index: int = 0
        self.selections: list[int] = [UNANSWERED] * len(quiz.questions)
        self._revealed: list[bool] = [False] * len(quiz.questions)
        self.score: float | None = quiz.score

    @property
    def question_count(self) -> int:
        return len(self.quiz.questions)

    @property
    def current_question(self) -> Question:
        return self.quiz.questions[self.current_index]

    def is_revealed(self, question_index: int) -> bool:
        return self._revealed[question_index]

    @property
    def current_revealed(self) -> bool:
        return self._revealed[self.current_index]

    def select_option(self, question_index: int, option_index: int) -> bool:
        """Record a choice for the current question and reveal it.

        Returns False when the question is already locked.
        """
        if question_index != self.current_index:
            raise ValueError("Options can only be selected on the current question.")
        options = self.quiz.questions[question_index].options
        if not 0 <= option_index < len(options):
            raise IndexError(f"Option index {option_index} out of range")
        if self._revealed[question_index]:
            return False
        self.selections[question_index] = option_index
        self._revealed[question_index] = True
        return True

    def can_go_next(self) -> bool:
        return self.current_index < self.question_count - 1 and self.current_revealed

    def can_go_previous(self) -> bool:
        return self.current_index > 0

    def go_next(self) -> bool:
        if not self.can_go_next():
            return False
        self.current_index += 1
        return True

    def go_previous(self) -> bool:
        if not self.can_go_previous():
            return False
        self.current_index -= 1
        return True

    def answered_count(self) -> int:
        return sum(1 for selection in self.selections if selection != UNANSWERED)

    def all_answered(self) -> bool:
        return all(selection != UNANSWERED for selection in self.selections)

    def option_states(self, question_index: int) -> list[OptionState]:
        question = self.quiz.questions[question_index]
        if not self._revealed[question_index]:
            return [OptionState.NEUTRAL] * len(question.options)
        selected = self.selections[question_index]
        states: list[OptionState] = []
        for idx, option in enumerate(question.options):
            if option.is_correct:
                states.append(OptionState.CORRECT)
            elif idx == selected:
                states.append(
                    OptionState.SELECTED if option.is_correct is None else OptionState.INCORRECT
                )
            else:
                states.append(OptionState.NEUTRAL)
        return states

    def replace_quiz(self, quiz: Quiz, score: float | None) -> None:
        """Adopt the server's scored quiz after a successful submission."""
        self.quiz = quiz
        self.score = score
