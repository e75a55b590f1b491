"""Provider downloading transcripts over HTTP."""

import logging

import httpx

from caption_search.models import Caption
from caption_search.parser import extract_captions
from .base import CaptionProvider

logger = logging.getLogger(__name__)


class HttpProvider(CaptionProvider):
    def __init__(self, timeout: float = 30.0):
        self._client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def get_captions(self, source: str, language: str = "en") -> list[Caption]:
        resp = await self._client.get(source, headers={"Accept-Language": language})
        resp.raise_for_status()
        logger.debug("Fetched %s (%d bytes)", source, len(resp.content))
        return extract_captions(resp.text)

    async def close(self) -> None:
        await self._client.aclose()
