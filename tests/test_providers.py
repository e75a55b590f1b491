"""Tests for caption providers."""

from unittest.mock import patch

import httpx
import pytest
import respx

from caption_search.errors import NoCaptionsFoundError
from caption_search.providers import (
    FileProvider,
    HttpProvider,
    YouTubeProvider,
    extract_video_id,
    provider_kind,
)


class MockSnippet:
    def __init__(self, text, start, duration):
        self.text = text
        self.start = start
        self.duration = duration


class TestFileProvider:
    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path, sample_transcript):
        path = tmp_path / "talk.vtt"
        path.write_text("WEBVTT\n\n" + sample_transcript, encoding="utf-8")
        captions = await FileProvider().get_captions(str(path))
        assert [c.text for c in captions] == ["Hello world", "Goodbye world"]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await FileProvider().get_captions(str(tmp_path / "missing.vtt"))


class TestHttpProvider:
    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch(self, sample_transcript):
        respx.get("https://cdn.example.com/talk.vtt").mock(
            return_value=httpx.Response(200, text=sample_transcript)
        )
        provider = HttpProvider()
        captions = await provider.get_captions("https://cdn.example.com/talk.vtt")
        assert captions[1].start == 5
        await provider.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_found(self):
        respx.get("https://cdn.example.com/missing.vtt").mock(
            return_value=httpx.Response(404)
        )
        provider = HttpProvider()
        with pytest.raises(httpx.HTTPStatusError):
            await provider.get_captions("https://cdn.example.com/missing.vtt")
        await provider.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_a_transcript(self):
        respx.get("https://cdn.example.com/page.html").mock(
            return_value=httpx.Response(200, text="<html></html>")
        )
        provider = HttpProvider()
        with pytest.raises(NoCaptionsFoundError):
            await provider.get_captions("https://cdn.example.com/page.html")
        await provider.close()


class TestYouTubeProvider:
    @pytest.mark.asyncio
    async def test_snippets_become_captions(self):
        provider = YouTubeProvider()
        snippets = [MockSnippet("Hello", 0.0, 2.0), MockSnippet("World", 2.0, 3.5)]
        with patch.object(provider, "_fetch", return_value=snippets):
            captions = await provider.get_captions("https://youtu.be/dQw4w9WgXcQ")
        assert [(c.text, c.start, c.end) for c in captions] == [
            ("Hello", 0.0, 2.0),
            ("World", 2.0, 5.5),
        ]

    @pytest.mark.asyncio
    async def test_transcripts_disabled(self):
        from youtube_transcript_api import TranscriptsDisabled
        provider = YouTubeProvider()
        with patch.object(provider, "_fetch", side_effect=TranscriptsDisabled("vid")):
            with pytest.raises(NoCaptionsFoundError, match="No transcript available"):
                await provider.get_captions("dQw4w9WgXcQ")

    @pytest.mark.asyncio
    async def test_invalid_id(self):
        with pytest.raises(ValueError, match="Invalid YouTube URL"):
            await YouTubeProvider().get_captions("nope")


class TestExtractVideoId:
    def test_standard_url(self):
        assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=30") == "dQw4w9WgXcQ"

    def test_short_url(self):
        assert extract_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_shorts_url(self):
        assert extract_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_raw_id(self):
        assert extract_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_other_url(self):
        assert extract_video_id("https://cdn.example.com/talk.vtt") is None


class TestProviderKind:
    def test_youtube_url(self):
        assert provider_kind("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "youtube"

    def test_youtube_id(self):
        assert provider_kind("dQw4w9WgXcQ") == "youtube"

    def test_http(self):
        assert provider_kind("https://cdn.example.com/talk.vtt") == "http"

    def test_file(self):
        assert provider_kind("captions/talk.vtt") == "file"
        assert provider_kind("lecture.srt") == "file"

    def test_existing_file_without_extension(self, tmp_path, monkeypatch):
        (tmp_path / "transcripts").write_text("", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert provider_kind("transcripts") == "file"
