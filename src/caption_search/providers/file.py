"""Provider reading transcripts from the local filesystem."""

import asyncio
import logging
from pathlib import Path

from caption_search.models import Caption
from caption_search.parser import extract_captions
from .base import CaptionProvider

logger = logging.getLogger(__name__)


class FileProvider(CaptionProvider):
    async def get_captions(self, source: str, language: str = "en") -> list[Caption]:
        path = Path(source).expanduser()
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, path.read_text, "utf-8")
        logger.debug("Read %d characters from %s", len(text), path)
        return extract_captions(text)
