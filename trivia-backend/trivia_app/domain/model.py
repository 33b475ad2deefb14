from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

ANSWERS_PER_QUESTION = 4


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizPhase(str, Enum):
    EMPTY = "EMPTY"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class Question:
    prompt: str
    answers: Tuple[str, ...]
    correct_answer: str

    def __post_init__(self) -> None:
        # lists are accepted but stored as a tuple so the question stays immutable
        object.__setattr__(self, "answers", tuple(self.answers))
        if len(self.answers) != ANSWERS_PER_QUESTION:
            raise ValueError(
                f"Question needs {ANSWERS_PER_QUESTION} answers, got {len(self.answers)}"
            )
        if self.correct_answer not in self.answers:
            raise ValueError("correct_answer must be one of answers")


@dataclass
class QuizSession:
    questions: Tuple[Question, ...] = ()
    current_index: int = 0
    score: int = 0
    locked: bool = False
    # outcome of the submission that locked the current question
    last_correct: Optional[bool] = None
