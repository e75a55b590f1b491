"""Data models for captions and search matches."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

DisplayMode = Literal["point", "line"]


class Caption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start: float
    end: float


class Match(BaseModel):
    model_config = ConfigDict(frozen=True)

    caption: Caption
    position: float  # start / duration, not clamped
    extent: float = 0.0  # fraction of the timeline covered by the marker


class MarkerOptions(BaseModel):
    color: str = "#ffffff"
    width: int = 2
    display: DisplayMode = "line"
    height: str | None = None
    duration: float | None = None  # overrides the player's own duration
