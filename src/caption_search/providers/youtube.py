"""Provider using youtube-transcript-api for YouTube videos."""

import asyncio
import logging
import re
from functools import partial

from youtube_transcript_api import YouTubeTranscriptApi, TranscriptsDisabled, NoTranscriptFound

from caption_search.errors import NoCaptionsFoundError
from caption_search.models import Caption
from .base import CaptionProvider

logger = logging.getLogger(__name__)

_VIDEO_ID_PATTERNS = [
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"youtube\.com/(?:embed|shorts|v)/([a-zA-Z0-9_-]{11})",
]


def extract_video_id(url_or_id: str) -> str | None:
    """Extract a YouTube video ID from a URL, or accept a bare ID."""
    for pattern in _VIDEO_ID_PATTERNS:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.fullmatch(r"[a-zA-Z0-9_-]{11}", url_or_id):
        return url_or_id
    return None


class YouTubeProvider(CaptionProvider):
    """Returns already timed captions; no transcript text is parsed."""

    def __init__(self):
        self._api = YouTubeTranscriptApi()

    async def get_captions(self, source: str, language: str = "en") -> list[Caption]:
        video_id = extract_video_id(source)
        if video_id is None:
            raise ValueError(f"Invalid YouTube URL or video ID: {source}")

        loop = asyncio.get_running_loop()
        try:
            fetched = await loop.run_in_executor(
                None,
                partial(self._fetch, video_id, language),
            )
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            raise NoCaptionsFoundError(f"No transcript available for {video_id}: {e}")

        captions = [
            Caption(text=s.text, start=s.start, end=s.start + s.duration)
            for s in fetched
        ]
        if not captions:
            raise NoCaptionsFoundError(f"Transcript for {video_id} is empty")
        logger.debug("Fetched %d captions for %s", len(captions), video_id)
        return captions

    def _fetch(self, video_id: str, language: str):
        """Synchronous fetch in executor."""
        return self._api.fetch(video_id, languages=[language, "en"])
