"""In-memory TTL cache for extracted captions."""

from cachetools import TTLCache

from caption_search.models import Caption


class CaptionCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._hits = 0
        self._misses = 0

    def _key(self, source: str, language: str) -> str:
        return f"{language}:{source}"

    def get(self, source: str, language: str) -> list[Caption] | None:
        result = self._cache.get(self._key(source, language))
        if result is None:
            self._misses += 1
            return None
        self._hits += 1
        return list(result)

    def set(self, source: str, language: str, captions: list[Caption]) -> None:
        self._cache[self._key(source, language)] = tuple(captions)

    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(total, 1) * 100, 1),
        }
