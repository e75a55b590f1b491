"""Abstract base for caption providers."""

from abc import ABC, abstractmethod

from caption_search.models import Caption


class CaptionProvider(ABC):
    @abstractmethod
    async def get_captions(self, source: str, language: str = "en") -> list[Caption]:
        """Load and parse the captions of a single source."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
