"""Canned upstream APIs for the tests, served through httpx.MockTransport."""
from typing import Callable, Optional

import httpx

TRIVIA_URL = "https://trivia.test/api.php"
TRANSLATE_URL = "https://translate.test/translate_a/single"


def raw_question(n: int, question: Optional[str] = None) -> dict:
    return {
        "category": "General Knowledge",
        "type": "multiple",
        "difficulty": "easy",
        "question": question or f"Question {n} &quot;quoted&quot;?",
        "correct_answer": f"Right {n}",
        "incorrect_answers": [f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c"],
    }


def trivia_payload(count: int, response_code: int = 0) -> dict:
    if response_code:
        return {"response_code": response_code, "results": []}
    return {"response_code": 0, "results": [raw_question(i) for i in range(1, count + 1)]}


def pt(text: str) -> str:
    """What the fake translator turns ``text`` into."""
    return f"[pt] {text}"


def gtx_payload(text: str) -> list:
    # split in two fragments, like the real service does for longer sentences
    half = len(text) // 2
    first, second = pt(text)[: half + 5], pt(text)[half + 5 :]
    fragments = [[first, text[:half], None, None, 3]]
    if second:
        fragments.append([second, text[half:], None, None, 3])
    return [fragments, None, "en"]


def make_client(
    trivia: Callable[[httpx.Request], httpx.Response],
    translate: Optional[Callable[[httpx.Request], httpx.Response]] = None,
) -> httpx.AsyncClient:
    calls = {"trivia": 0, "translate": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "trivia.test":
            calls["trivia"] += 1
            return trivia(request)
        calls["translate"] += 1
        return (translate or translating)(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.calls = calls
    return client


def serving(payload: dict) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)
    return handler


def serving_count(request: httpx.Request) -> httpx.Response:
    """Returns as many questions as the request asks for."""
    return httpx.Response(200, json=trivia_payload(int(request.url.params["amount"])))


def translating(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=gtx_payload(request.url.params["q"]))


def failing(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def garbage(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=b"<html>not json</html>")
