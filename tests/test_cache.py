"""Tests for the caption cache."""

from caption_search.cache import CaptionCache
from caption_search.models import Caption


class TestCaptionCache:
    def test_set_and_get(self, sample_captions):
        cache = CaptionCache(max_size=10, ttl=3600)
        cache.set("talk.vtt", "en", sample_captions)
        assert cache.get("talk.vtt", "en") == sample_captions

    def test_returned_list_is_a_copy(self, sample_captions):
        cache = CaptionCache(max_size=10, ttl=3600)
        cache.set("talk.vtt", "en", sample_captions)
        cache.get("talk.vtt", "en").clear()
        assert len(cache.get("talk.vtt", "en")) == 2

    def test_miss(self):
        cache = CaptionCache(max_size=10, ttl=3600)
        assert cache.get("nonexistent", "en") is None

    def test_different_languages(self):
        cache = CaptionCache(max_size=10, ttl=3600)
        en = [Caption(text="hello", start=0, end=1)]
        de = [Caption(text="hallo", start=0, end=1)]
        cache.set("abc", "en", en)
        cache.set("abc", "de", de)
        assert cache.get("abc", "en") == en
        assert cache.get("abc", "de") == de

    def test_stats_after_operations(self, sample_captions):
        cache = CaptionCache(max_size=10, ttl=3600)
        cache.set("abc", "en", sample_captions)
        cache.get("abc", "en")  # hit
        cache.get("xyz", "en")  # miss
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 50.0

    def test_max_size(self, sample_captions):
        cache = CaptionCache(max_size=2, ttl=3600)
        for source in ("a", "b", "c"):
            cache.set(source, "en", sample_captions)
        assert cache.stats()["size"] == 2
