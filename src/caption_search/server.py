"""Caption Search MCP Server."""

import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from pydantic import Field
from mcp.server.fastmcp import FastMCP

from caption_search.cache import CaptionCache
from caption_search.config import Settings, Transport
from caption_search.index import build_index
from caption_search.models import Caption, Match
from caption_search.parser import format_offset
from caption_search.providers import (
    CaptionProvider,
    FileProvider,
    HttpProvider,
    YouTubeProvider,
    provider_kind,
)

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("caption-search")

# Module-level state
_providers: dict[str, CaptionProvider] = {}
_cache = None
_settings = None
_rate_window = deque()

TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _providers, _cache, _settings, _rate_window
    _settings = Settings()
    _cache = CaptionCache(
        max_size=_settings.cache_max_size,
        ttl=_settings.cache_ttl_seconds,
    )
    _rate_window = deque()
    _providers = {
        "file": FileProvider(),
        "http": HttpProvider(timeout=_settings.http_timeout_seconds),
        "youtube": YouTubeProvider(),
    }

    logger.info("Server started")
    yield

    for provider in _providers.values():
        await provider.close()
    logger.info("Server stopped")


mcp = FastMCP(
    "Caption Search",
    instructions="Search subtitle transcripts and locate matches on a video timeline",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 30)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


async def _get_captions_cached(source: str, language: str) -> list[Caption]:
    """Get captions with cache layer."""
    cached = _cache.get(source, language)
    if cached:
        return cached

    kind = provider_kind(source)
    captions = await _providers[kind].get_captions(source, language)
    logger.info(f"Loaded {len(captions)} captions from {kind} source {source}")
    _cache.set(source, language, captions)
    return captions


def _captions_to_markdown(captions: list[Caption]) -> str:
    lines = []
    for cap in captions:
        lines.append(f"**[{format_offset(cap.start)} - {format_offset(cap.end)}]** {cap.text}")
    return "\n".join(lines)


def _matches_to_markdown(matches: list[Match]) -> str:
    lines = []
    for m in matches:
        line = f"- **[{format_offset(m.caption.start)}]** @ {m.position:.1%}"
        if m.extent:
            line += f" (+{m.extent:.1%})"
        lines.append(f"{line}: {m.caption.text}")
    return "\n".join(lines)


async def _search(
    source: str, query: str, language: str, duration: float | None, display: str | None
) -> tuple[list[Match], float]:
    captions = await _get_captions_cached(source, language)
    if duration is None:
        # Sub-second clips parse to end offsets of 0.
        duration = max((c.end for c in captions), default=0) or 1.0
    options = _settings.marker_options(display=display)
    index = build_index(captions, min_query_length=_settings.min_query_length)
    return index.query(query, duration, options), duration


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_captions(
    source: Annotated[str, Field(description="Transcript source: local .srt/.vtt path, transcript URL, or YouTube URL/video ID")],
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code, used for YouTube sources")] = "en",
) -> str:
    """List every caption of a transcript with its start and end offsets."""
    _check_rate_limit()

    try:
        captions = await _get_captions_cached(source, language)
    except Exception as e:
        return f"Error loading captions from {source}: {e}"

    header = f"## Captions: {source}\n**Count:** {len(captions)}\n"
    return f"{header}\n{_captions_to_markdown(captions)}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def search_captions(
    source: Annotated[str, Field(description="Transcript source: local .srt/.vtt path, transcript URL, or YouTube URL/video ID")],
    query: Annotated[str, Field(description="Case-insensitive substring to find (at least 3 characters)")],
    duration: Annotated[float | None, Field(default=None, gt=0, description="Total media duration in seconds; defaults to the end of the last caption")] = None,
    display: Annotated[Literal["point", "line"] | None, Field(default=None, description="Marker mode: point for fixed-size dots, line for spans proportional to the caption length")] = None,
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code, used for YouTube sources")] = "en",
) -> str:
    """Find captions containing a phrase and report where each falls on the timeline."""
    _check_rate_limit()

    try:
        matches, duration = await _search(source, query, language, duration, display)
    except Exception as e:
        return f"Error searching {source}: {e}"

    if not matches:
        return f"No matches found for '{query}' in {source}."

    header = (
        f"## Search Results: '{query}' in {source}\n"
        f"**{len(matches)} match(es) found** over {format_offset(duration)}\n"
    )
    return f"{header}\n{_matches_to_markdown(matches)}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def batch_search(
    sources: Annotated[list[str], Field(description="Transcript sources to search (maximum 10)")],
    query: Annotated[str, Field(description="Case-insensitive substring to find (at least 3 characters)")],
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code, used for YouTube sources")] = "en",
) -> str:
    """Search the same phrase across several transcripts (max 10)."""
    _check_rate_limit()

    if len(sources) > 10:
        return "Error: Maximum 10 sources per batch."

    results = []
    for source in sources:
        try:
            matches, _ = await _search(source, query, language, None, None)
        except Exception as e:
            results.append(f"### {source}\n**Error:** {e}\n")
            continue
        body = _matches_to_markdown(matches) if matches else "No matches."
        results.append(f"### {source}\n**Matches:** {len(matches)}\n\n{body}\n")

    header = f"## Batch Search: '{query}' ({len(sources)} sources)\n"
    return header + "\n---\n\n".join(results)


# -- MCP Prompts --


@mcp.prompt()
def find_key_moments(
    source: Annotated[str, Field(description="Transcript source to analyze")],
    topic: Annotated[str, Field(description="The topic or phrase to look for")],
) -> str:
    """Find the moments of a video where a topic comes up."""
    return f"""Please use the search_captions tool to find mentions of "{topic}" in: {source}

Then use get_captions to read the surrounding captions.

Present:
1. Every timestamp where "{topic}" is mentioned, with its position on the timeline
2. The caption text around each mention
3. Whether mentions cluster in one part of the video"""


# -- MCP Resources --


@mcp.resource("captions://help")
def help_resource() -> str:
    """Usage guide for the Caption Search MCP server."""
    return """# Caption Search MCP Server - Help Guide

## Sources
- Local subtitle files (`.vtt`, `.srt` with `.` millisecond separators)
- Transcript URLs (http/https)
- YouTube URLs or 11-character video IDs

Cues are a `start --> end` line followed by exactly one text line.
Timestamps are `hh:mm:ss.MMM` or `mm:ss.MMM`.

## Tools

### get_captions
List all captions with start/end offsets.
- Example: get_captions(source="talk.vtt")

### search_captions
Case-insensitive substring search; queries shorter than 3 characters match nothing.
Each match reports its position as a fraction of the duration.
- Example: search_captions(source="talk.vtt", query="neural", duration=3600, display="point")

### batch_search
Search one phrase across up to 10 sources.
- Example: batch_search(sources=["a.vtt", "b.vtt"], query="budget")
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
