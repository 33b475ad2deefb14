import asyncio
import random
from collections import Counter

import httpx
import pytest

from fakes import (
    TRANSLATE_URL,
    TRIVIA_URL,
    failing,
    garbage,
    make_client,
    pt,
    raw_question,
    serving,
    serving_count,
    trivia_payload,
)
from trivia_app.domain.errors import AcquisitionError, NetworkFailure, SourceUnavailable
from trivia_app.domain.model import Difficulty
from trivia_app.repositories.trivia_repository import TriviaRepository
from trivia_app.services.question_acquirer import QuestionAcquirer
from trivia_app.services.translator import Translator


def _acquirer(trivia, translate=None, seed=7):
    client = make_client(trivia=trivia, translate=translate)
    acquirer = QuestionAcquirer(
        TriviaRepository(client, TRIVIA_URL),
        Translator(client, TRANSLATE_URL, "pt"),
        rng=random.Random(seed),
    )
    return acquirer, client.calls


class IdentityTranslator:
    async def translate(self, text, target_lang=None):
        return text


def test_translated_questions_keep_correct_answer():
    acquirer, _ = _acquirer(serving_count)
    questions = asyncio.run(acquirer.acquire(Difficulty.EASY, 5))

    assert len(questions) == 5
    for n, q in enumerate(questions, start=1):
        assert q.prompt == pt(f'Question {n} "quoted"?')
        assert q.correct_answer == pt(f"Right {n}")
        assert q.correct_answer in q.answers
        assert sorted(q.answers) == sorted(
            pt(a) for a in (f"Right {n}", f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c")
        )


def test_request_parameters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=trivia_payload(3))

    acquirer, _ = _acquirer(handler)
    asyncio.run(acquirer.acquire(Difficulty.HARD, 3))
    assert seen == {"amount": "3", "difficulty": "hard", "type": "multiple"}


def test_invariant_for_every_difficulty():
    for difficulty in Difficulty:
        for count in (1, 2, 10):
            acquirer, _ = _acquirer(serving_count, seed=count)
            for q in asyncio.run(acquirer.acquire(difficulty, count)):
                assert q.answers.count(q.correct_answer) == 1


def test_source_order_is_preserved():
    acquirer, _ = _acquirer(serving_count)
    questions = asyncio.run(acquirer.acquire(Difficulty.MEDIUM, 8))
    assert [q.prompt for q in questions] == [pt(f'Question {n} "quoted"?') for n in range(1, 9)]


def test_correct_answer_tracked_by_position_not_text():
    # every answer translates to the same text, so only the position identifies the right one
    def collapse(request):
        text = request.url.params["q"]
        out = "?" if text.startswith(("Right", "Wrong")) else text
        return httpx.Response(200, json=[[[out, text]]])

    acquirer, _ = _acquirer(serving(trivia_payload(1)), translate=collapse, seed=3)
    (q,) = asyncio.run(acquirer.acquire(Difficulty.EASY, 1))
    assert q.answers == ("?", "?", "?", "?")
    assert q.correct_answer == "?"


def test_translation_failure_falls_back_to_decoded_text():
    acquirer, _ = _acquirer(serving_count, translate=failing)
    questions = asyncio.run(acquirer.acquire(Difficulty.EASY, 3))

    assert len(questions) == 3
    for n, q in enumerate(questions, start=1):
        assert q.prompt == f'Question {n} "quoted"?'
        assert q.correct_answer == f"Right {n}"
        assert set(q.answers) == {f"Right {n}", f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c"}


def test_non_zero_response_code_is_source_unavailable():
    acquirer, calls = _acquirer(serving(trivia_payload(5, response_code=1)))
    with pytest.raises(SourceUnavailable) as exc:
        asyncio.run(acquirer.acquire(Difficulty.HARD, 5))
    assert exc.value.response_code == 1
    assert calls["translate"] == 0


def test_too_few_results_is_source_unavailable():
    acquirer, calls = _acquirer(serving(trivia_payload(2)))
    with pytest.raises(SourceUnavailable):
        asyncio.run(acquirer.acquire(Difficulty.EASY, 5))
    assert calls["translate"] == 0


def test_malformed_item_fails_before_translating():
    payload = trivia_payload(2)
    payload["results"][1]["incorrect_answers"] = ["only one"]
    acquirer, calls = _acquirer(serving(payload))
    with pytest.raises(SourceUnavailable):
        asyncio.run(acquirer.acquire(Difficulty.EASY, 2))
    assert calls["translate"] == 0


def test_network_failure():
    for handler in (failing, garbage, lambda r: httpx.Response(500)):
        acquirer, calls = _acquirer(handler)
        with pytest.raises(NetworkFailure):
            asyncio.run(acquirer.acquire(Difficulty.EASY, 5))
        assert calls["translate"] == 0


def test_errors_share_a_base_class():
    assert issubclass(NetworkFailure, AcquisitionError)
    assert issubclass(SourceUnavailable, AcquisitionError)


def test_count_must_be_positive():
    acquirer, calls = _acquirer(serving_count)
    with pytest.raises(ValueError):
        asyncio.run(acquirer.acquire(Difficulty.EASY, 0))
    assert calls["trivia"] == 0


def test_shuffle_is_roughly_uniform():
    client = make_client(trivia=serving(trivia_payload(50)))
    acquirer = QuestionAcquirer(
        TriviaRepository(client, TRIVIA_URL), IdentityTranslator(), rng=random.Random(2024)
    )

    async def run():
        positions = Counter()
        for _ in range(40):
            for q in await acquirer.acquire(Difficulty.EASY, 50):
                positions[q.answers.index(q.correct_answer)] += 1
        return positions

    positions = asyncio.run(run())
    assert sum(positions.values()) == 2000
    for slot in range(4):
        # expected 500 per slot; 100 is about five standard deviations
        assert abs(positions[slot] - 500) < 100, positions


def test_shuffle_differs_between_questions():
    acquirer, _ = _acquirer(serving_count)
    orders = {
        tuple(acquirer.prepare(raw_question(1))[1]) for _ in range(50)
    }
    assert len(orders) > 1


def test_untranslatable_long_prompt_keeps_the_batch():
    long_prompt = "é" * 12000
    acquirer, _ = _acquirer(serving({"response_code": 0, "results": [raw_question(1, long_prompt)]}))
    (q,) = asyncio.run(acquirer.acquire(Difficulty.EASY, 1))
    assert q.prompt == long_prompt
    assert q.correct_answer == pt("Right 1")
