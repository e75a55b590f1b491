"""Timestamp and caption parsing for subtitle transcripts."""

import logging
import re
from collections.abc import Iterable, Sequence

from caption_search.errors import MalformedTimestampError, NoCaptionsFoundError
from caption_search.models import Caption

logger = logging.getLogger(__name__)

_TIMESTAMP = re.compile(r"(?:(\d{2}):)?(\d{2}):(\d{2})\.(\d{3})")

# The block scan is looser than _TIMESTAMP on the milliseconds separator so
# that "00:00:01,000" reaches parse_timestamp and fails loudly instead of
# being skipped.
_CUE_TIME = r"(?:\d\d:)?\d\d:\d\d.\d\d\d"
_CUE_BLOCK = re.compile(
    rf"({_CUE_TIME}) --> ({_CUE_TIME})\n([^\n]+)"
    rf"(?=\n[ \t]*(?:\n|$)|$|\n{_CUE_TIME} --> )"
)


def parse_timestamp(timestamp: str) -> int:
    """Convert ``hh:mm:ss.MMM`` or ``mm:ss.MMM`` to whole seconds.

    Milliseconds are validated but not counted.
    """
    match = _TIMESTAMP.fullmatch(timestamp)
    if not match:
        raise MalformedTimestampError(timestamp)
    hours, minutes, seconds, _millis = match.groups()
    return int(seconds) + int(minutes) * 60 + int(hours or 0) * 3600


def format_offset(seconds: float) -> str:
    """Format seconds to H:MM:SS or M:SS."""
    total = int(seconds)
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def extract_captions(transcript: str) -> list[Caption]:
    """Return every single-line cue of a transcript, in order of appearance.

    Cues whose text spans more than one line are skipped. A transcript
    without any usable cue raises NoCaptionsFoundError; a bad timestamp in
    any cue raises MalformedTimestampError and nothing is returned.
    """
    text = transcript.replace("\r\n", "\n")
    captions = [
        Caption(
            text=caption_text,
            start=parse_timestamp(start),
            end=parse_timestamp(end),
        )
        for start, end, caption_text in _CUE_BLOCK.findall(text)
    ]
    if not captions:
        raise NoCaptionsFoundError()
    logger.debug("Extracted %d captions", len(captions))
    return captions


def merge_sources(sources: Iterable[str | Sequence[Caption]]) -> list[Caption]:
    """Concatenate captions from several sources, keeping source order.

    Each source is either transcript text or an already parsed caption list.
    """
    captions: list[Caption] = []
    for source in sources:
        if isinstance(source, str):
            captions.extend(extract_captions(source))
        else:
            captions.extend(source)
    return captions
