import logging
from typing import List

import httpx

from ..domain.errors import NetworkFailure, SourceUnavailable
from ..domain.model import Difficulty

logger = logging.getLogger(__name__)


class TriviaRepository:
    """Raw access to the Open Trivia DB question endpoint."""

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    async def fetch_questions(self, difficulty: Difficulty, amount: int) -> List[dict]:
        params = {
            "amount": amount,
            "difficulty": Difficulty(difficulty).value,
            "type": "multiple",
        }
        try:
            resp = await self.client.get(self.base_url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.error("Trivia fetch failed: %s", e)
            raise NetworkFailure(f"Could not fetch questions: {e}") from e
        except ValueError as e:
            # body was not JSON
            logger.error("Trivia source sent an unreadable body: %s", e)
            raise NetworkFailure("Trivia source returned an invalid response") from e

        if not isinstance(data, dict):
            raise SourceUnavailable("Trivia source returned an unexpected payload")

        code = data.get("response_code")
        if code != 0:
            logger.warning("Trivia source refused the request (response_code=%s)", code)
            if isinstance(code, int):
                raise SourceUnavailable.from_response_code(code)
            raise SourceUnavailable("Trivia source response has no response_code")

        results = data.get("results")
        if not isinstance(results, list) or len(results) < amount:
            got = len(results) if isinstance(results, list) else 0
            raise SourceUnavailable(f"Trivia source returned {got} of {amount} questions")

        logger.info("Fetched %d %s questions", len(results), params["difficulty"])
        return results[:amount]
