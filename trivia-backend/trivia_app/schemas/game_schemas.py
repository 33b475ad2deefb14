from typing import List, Optional
from pydantic import BaseModel, Field

from ..core.config import settings
from ..domain.model import Difficulty, QuizPhase


class StartGameIn(BaseModel):
    difficulty: Difficulty
    count: int = Field(default_factory=lambda: settings.QUESTION_COUNT, ge=1, le=50)


class AnswerIn(BaseModel):
    choice: str


class QuestionOut(BaseModel):
    # never carries the correct answer: that is only revealed after answering
    questionNumber: int
    total: int
    questionText: str
    answers: list[str]
    answered: bool


class GameStateOut(BaseModel):
    phase: QuizPhase
    difficulty: Optional[Difficulty] = None
    questionNumber: Optional[int] = None
    total: int
    score: int
    answered: bool
    progressPercent: int
    complete: bool


class AnswerOut(BaseModel):
    correct: bool
    correctAnswer: str
    score: int
    advanceAfterMs: int


class ResultOut(BaseModel):
    score: int
    total: int
    percentage: int
    tier: str
    emoji: str
    message: str


class DifficultiesOut(BaseModel):
    difficulties: List[Difficulty]
    defaultCount: int
