import logging
from typing import Optional

from ..domain.errors import AcquisitionError, InvalidTransition, NoActiveGame
from ..domain.model import Difficulty
from .question_acquirer import QuestionAcquirer
from .quiz_engine import QuizEngine
from .results import QuizResult, grade

logger = logging.getLogger(__name__)


class GameService:
    """Holds the single game in play. Starting a new one discards the old."""

    def __init__(self, acquirer: QuestionAcquirer) -> None:
        self.acquirer = acquirer
        self._engine: Optional[QuizEngine] = None
        self.difficulty: Optional[Difficulty] = None

    @property
    def engine(self) -> QuizEngine:
        if self._engine is None:
            raise NoActiveGame("No game has been started")
        return self._engine

    def has_game(self) -> bool:
        return self._engine is not None

    async def start(self, difficulty: Difficulty, count: int) -> QuizEngine:
        # back to the pre-game state first; a failed start must not leave old questions around
        self._engine = None
        self.difficulty = None
        try:
            questions = await self.acquirer.acquire(difficulty, count)
        except AcquisitionError as e:
            logger.warning("Could not start a %s game: %s", Difficulty(difficulty).value, e)
            raise

        engine = QuizEngine()
        engine.load(questions)
        self._engine = engine
        self.difficulty = Difficulty(difficulty)
        return engine

    def result(self) -> QuizResult:
        engine = self.engine
        if not engine.is_complete():
            raise InvalidTransition("The game is not finished yet")
        return grade(engine.score(), engine.total())
