import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


def join_fragments(data: Any) -> Optional[str]:
    """
    Rebuilds the translated sentence from the gtx payload.

    The service answers with a nested list whose first element holds
    ``[translated, original, ...]`` entries, one per sentence fragment.
    Returns None when the payload does not have that shape.
    """
    if not isinstance(data, list) or not data or not isinstance(data[0], list):
        return None
    parts = []
    for item in data[0]:
        if not isinstance(item, list) or not item:
            return None
        if item[0] is None:
            # transliteration rows carry no translated text
            continue
        if not isinstance(item[0], str):
            return None
        parts.append(item[0])
    if not parts:
        return None
    return "".join(parts)


class Translator:
    def __init__(self, client: httpx.AsyncClient, base_url: str, target_lang: str) -> None:
        self.client = client
        self.base_url = base_url
        self.target_lang = target_lang

    async def translate(self, text: str, target_lang: Optional[str] = None) -> str:
        """Translates ``text``; on any failure the original text comes back."""
        if not text.strip():
            return text

        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": target_lang or self.target_lang,
            "dt": "t",
            "q": text,
        }
        try:
            resp = await self.client.get(self.base_url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Translation failed, keeping original text: %s", e)
            return text

        translated = join_fragments(data)
        if translated is None:
            logger.warning("Unexpected translation payload, keeping original text")
            return text
        return translated
