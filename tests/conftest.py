"""Shared test fixtures."""

import pytest

from caption_search.models import Caption

SAMPLE_TRANSCRIPT = """00:00:01.000 --> 00:00:04.000
Hello world
00:00:05.000 --> 00:00:08.000
Goodbye world
"""


@pytest.fixture
def sample_transcript():
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def sample_captions():
    return [
        Caption(text="Hello world", start=1, end=4),
        Caption(text="Goodbye world", start=5, end=8),
    ]
