"""Caption providers."""

from pathlib import Path

from .base import CaptionProvider
from .file import FileProvider
from .http import HttpProvider
from .youtube import YouTubeProvider, extract_video_id

__all__ = [
    "CaptionProvider",
    "FileProvider",
    "HttpProvider",
    "YouTubeProvider",
    "extract_video_id",
    "provider_kind",
]


def provider_kind(source: str) -> str:
    """Classify a source as "youtube", "http" or "file"."""
    is_url = source.startswith(("http://", "https://"))
    if is_url:
        return "youtube" if extract_video_id(source) else "http"
    if Path(source).exists():
        return "file"
    if extract_video_id(source) and "." not in source and "/" not in source:
        return "youtube"
    return "file"
