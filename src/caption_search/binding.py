"""Wiring a caption index to a media player and a search input."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from caption_search.config import Settings
from caption_search.errors import ConfigurationError
from caption_search.index import CaptionIndex, build_index, marker_style
from caption_search.models import Caption, MarkerOptions, Match
from caption_search.parser import merge_sources

logger = logging.getLogger(__name__)


class PlayerHandle(ABC):
    """Host media player the markers are drawn for."""

    duration: float | None = None

    @abstractmethod
    def is_ready(self) -> bool:
        """Whether the player has finished its own initialization."""
        ...

    @abstractmethod
    async def seek_to(self, seconds: float) -> None:
        ...

    @abstractmethod
    async def play_media(self) -> None:
        ...


class SearchInput(ABC):
    @abstractmethod
    def subscribe(self, callback: Callable[[str], object]) -> None:
        """Call ``callback`` with the current value on every change."""
        ...


async def wait_until_ready(
    player: PlayerHandle, timeout: float = 10.0, poll_interval: float = 0.1
) -> bool:
    """Poll the player until it is ready; False if ``timeout`` runs out first."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not player.is_ready():
        if loop.time() >= deadline:
            return False
        await asyncio.sleep(poll_interval)
    return True


class IndexHandle:
    """A bound index: answers input changes and activates matches."""

    def __init__(
        self,
        player: PlayerHandle,
        index: CaptionIndex,
        duration: float,
        options: MarkerOptions,
        on_matches: Callable[[list[Match]], object] | None = None,
    ):
        self.player = player
        self.index = index
        self.duration = duration
        self.options = options
        self.on_matches = on_matches
        self.matches: list[Match] = []

    def on_input(self, value: str) -> list[Match]:
        # Each change replaces the previous marker set entirely.
        self.matches = self.index.query(value, self.duration, self.options)
        if self.on_matches is not None:
            self.on_matches(self.matches)
        return self.matches

    def markers(self) -> list[dict]:
        return [marker_style(m, self.options) for m in self.matches]

    async def activate(self, match: Match) -> None:
        """Seek to the match and start playback."""
        await self.player.seek_to(match.caption.start)
        await self.player.play_media()


async def build_and_bind(
    player: PlayerHandle | None,
    search_input: SearchInput | None,
    sources: str | Sequence[str | Sequence[Caption]],
    options: MarkerOptions | None = None,
    settings: Settings | None = None,
    on_matches: Callable[[list[Match]], object] | None = None,
) -> IndexHandle:
    """Build a caption index from ``sources`` and bind it to ``search_input``.

    ``sources`` is a single transcript or a sequence whose items are
    transcripts or parsed caption lists. Parser errors propagate unchanged;
    a missing or unresponsive collaborator raises ConfigurationError.
    """
    settings = settings or Settings()
    options = options or settings.marker_options()

    if player is None:
        raise ConfigurationError("No media player provided")
    if search_input is None:
        raise ConfigurationError("No search input provided")

    ready = await wait_until_ready(
        player,
        timeout=settings.ready_timeout_seconds,
        poll_interval=settings.ready_poll_interval_seconds,
    )
    if not ready:
        logger.warning("Player not ready after %.1fs", settings.ready_timeout_seconds)
        raise ConfigurationError("Player did not initialize")

    if isinstance(sources, str):
        sources = [sources]
    captions = merge_sources(sources)

    duration = options.duration or player.duration
    if not duration or duration <= 0:
        raise ConfigurationError(f"Player reported no usable duration: {duration!r}")

    index = build_index(captions, min_query_length=settings.min_query_length)
    handle = IndexHandle(player, index, duration, options, on_matches=on_matches)
    search_input.subscribe(handle.on_input)
    logger.info("Bound %d captions over %.1fs", len(index), duration)
    return handle
