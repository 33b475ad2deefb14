import logging
from typing import Sequence, Tuple

from ..domain.errors import InvalidTransition
from ..domain.model import Question, QuizPhase, QuizSession

logger = logging.getLogger(__name__)


class QuizEngine:
    """
    Linear quiz state machine: EMPTY → IN_PROGRESS → COMPLETE.

    Each question must be answered exactly once (``submit_answer`` locks it)
    before ``advance`` moves on. Calling an operation in the wrong state
    raises ``InvalidTransition``; callers are expected to check first.
    """

    def __init__(self) -> None:
        self._session = QuizSession()

    # --- state ---

    @property
    def phase(self) -> QuizPhase:
        s = self._session
        if not s.questions:
            return QuizPhase.EMPTY
        if s.current_index >= len(s.questions):
            return QuizPhase.COMPLETE
        return QuizPhase.IN_PROGRESS

    @property
    def current_index(self) -> int:
        return self._session.current_index

    @property
    def locked(self) -> bool:
        return self._session.locked

    def is_complete(self) -> bool:
        return self.phase is QuizPhase.COMPLETE

    def score(self) -> int:
        return self._session.score

    def total(self) -> int:
        return len(self._session.questions)

    def progress(self) -> Tuple[int, int]:
        """(1-based number of the question on screen, total)"""
        self._require(QuizPhase.IN_PROGRESS, "progress")
        return self._session.current_index + 1, self.total()

    def _require(self, phase: QuizPhase, op: str) -> None:
        if self.phase is not phase:
            raise InvalidTransition(f"{op}() is not allowed in phase {self.phase.value}")

    # --- transitions ---

    def load(self, questions: Sequence[Question]) -> None:
        self._require(QuizPhase.EMPTY, "load")
        if not questions:
            raise InvalidTransition("load() needs at least one question")
        self._session = QuizSession(questions=tuple(questions))
        logger.info("Quiz loaded with %d questions", len(questions))

    def current_question(self) -> Question:
        self._require(QuizPhase.IN_PROGRESS, "current_question")
        return self._session.questions[self._session.current_index]

    def submit_answer(self, choice: str) -> bool:
        """
        Scores ``choice`` against the current question and locks it.

        A second submission for the same question changes nothing and
        returns the outcome of the first one.
        """
        self._require(QuizPhase.IN_PROGRESS, "submit_answer")
        s = self._session
        if s.locked:
            logger.warning("Answer ignored: question %d already answered", s.current_index)
            return bool(s.last_correct)

        correct = choice == self.current_question().correct_answer
        s.locked = True
        s.last_correct = correct
        if correct:
            s.score += 1
        return correct

    def advance(self) -> None:
        self._require(QuizPhase.IN_PROGRESS, "advance")
        s = self._session
        if not s.locked:
            raise InvalidTransition("advance() before the current question was answered")

        s.current_index += 1
        if self.is_complete():
            logger.info("Quiz complete: %d/%d", s.score, self.total())
            return
        s.locked = False
        s.last_correct = None
