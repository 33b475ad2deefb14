import asyncio
import logging
import random
from typing import List, Optional, Tuple

from ..domain.errors import SourceUnavailable
from ..domain.model import ANSWERS_PER_QUESTION, Difficulty, Question
from ..repositories.trivia_repository import TriviaRepository
from . import html_decoder
from .translator import Translator

logger = logging.getLogger(__name__)


def _check_item(item: object, position: int) -> dict:
    """Rejects raw items that cannot become a four-answer question."""
    if not isinstance(item, dict):
        raise SourceUnavailable(f"Question #{position} is not an object")
    incorrect = item.get("incorrect_answers")
    if (
        not isinstance(item.get("question"), str)
        or not isinstance(item.get("correct_answer"), str)
        or not isinstance(incorrect, list)
        or len(incorrect) != ANSWERS_PER_QUESTION - 1
        or not all(isinstance(a, str) for a in incorrect)
    ):
        raise SourceUnavailable(f"Question #{position} is malformed")
    return item


class QuestionAcquirer:
    """
    Fetch → decode → shuffle → translate, for one batch of questions.

    The correct answer is tracked by its index in the shuffled list, because
    translated text can't be matched back to the original by equality.
    """

    def __init__(
        self,
        repo: TriviaRepository,
        translator: Translator,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repo
        self.translator = translator
        self.rng = rng or random.Random()

    async def acquire(self, difficulty: Difficulty, count: int) -> List[Question]:
        if count < 1:
            raise ValueError("count must be at least 1")

        raw_items = await self.repo.fetch_questions(difficulty, count)
        # validate the whole batch before a single translation is started
        items = [_check_item(item, i) for i, item in enumerate(raw_items, start=1)]

        questions: List[Question] = []
        for item in items:
            prompt, answers, correct_index = self.prepare(item)
            questions.append(await self.translate_question(prompt, answers, correct_index))

        logger.info("Acquired %d %s questions", len(questions), Difficulty(difficulty).value)
        return questions

    def prepare(self, item: dict) -> Tuple[str, List[str], int]:
        """Decodes one raw item and shuffles its answers (Fisher-Yates)."""
        prompt = html_decoder.decode(item["question"])
        answers = [html_decoder.decode(item["correct_answer"])]
        answers += [html_decoder.decode(a) for a in item["incorrect_answers"]]

        order = list(range(len(answers)))
        self.rng.shuffle(order)
        shuffled = [answers[i] for i in order]
        # index 0 of the unshuffled list is always the correct answer
        return prompt, shuffled, order.index(0)

    async def translate_question(
        self, prompt: str, answers: List[str], correct_index: int
    ) -> Question:
        # gather keeps argument order, so translated answers line up with `answers`
        translated = await asyncio.gather(
            self.translator.translate(prompt),
            *(self.translator.translate(a) for a in answers),
        )
        t_prompt, t_answers = translated[0], list(translated[1:])
        return Question(
            prompt=t_prompt,
            answers=tuple(t_answers),
            correct_answer=t_answers[correct_index],
        )
