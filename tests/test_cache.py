"""
Tests for the in-memory TTL cache.
"""

import pytest

from pulse.cache import CacheEntry, TTLCache


class TestCacheEntry:

    def test_entry_without_ttl_never_expires(self):
        entry = CacheEntry(value="x", inserted_at=0, ttl=None)
        assert entry.is_fresh(10 ** 9)

    def test_entry_is_fresh_until_exactly_ttl(self):
        entry = CacheEntry(value="x", inserted_at=100, ttl=300)
        assert entry.is_fresh(399.9)
        assert not entry.is_fresh(400)

    def test_age(self):
        assert CacheEntry(value=None, inserted_at=100).age(160) == 60


class TestTTLCache:

    def test_get_missing_returns_default(self, clock):
        cache = TTLCache(ttl=60, clock=clock)
        assert cache.get("missing") is None
        assert cache.get("missing", []) == []

    def test_set_then_get(self, clock):
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("k", [1, 2, 3])
        assert cache.get("k") == [1, 2, 3]
        assert "k" in cache

    def test_entry_expires_at_ttl(self, clock):
        cache = TTLCache(ttl=300, clock=clock)
        cache.set("k", "v")

        clock.advance(299)
        assert cache.get("k") == "v"

        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0  # stale entries are dropped on read

    def test_none_ttl_is_permanent(self, clock):
        cache = TTLCache(ttl=None, clock=clock)
        cache.set("k", "v")
        clock.advance(10 ** 8)
        assert cache.get("k") == "v"

    def test_per_entry_ttl_overrides_default(self, clock):
        cache = TTLCache(ttl=None, clock=clock)
        cache.set("short", "v", ttl=10)
        cache.set("forever", "v")

        clock.advance(10)
        assert cache.get("short") is None
        assert cache.get("forever") == "v"

    def test_set_replaces_and_restarts_age(self, clock):
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("k", "old")
        clock.advance(50)
        cache.set("k", "new")
        clock.advance(50)
        assert cache.get("k") == "new"

    def test_is_fresh(self, clock):
        cache = TTLCache(ttl=60, clock=clock)
        assert not cache.is_fresh("k")
        cache.set("k", "v")
        assert cache.is_fresh("k")
        clock.advance(60)
        assert not cache.is_fresh("k")

    def test_clear(self, clock):
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_lru_eviction_keeps_recently_used(self, clock):
        cache = TTLCache(ttl=None, max_size=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.get("a")  # "b" is now least recently used
        cache.set("c", 3)

        assert cache.get("a") == 1
        assert cache.get("b") is None
        assert cache.get("c") == 3

    def test_unbounded_when_max_size_zero(self, clock):
        cache = TTLCache(ttl=None, max_size=0, clock=clock)
        for i in range(500):
            cache.set(i, i)
        assert len(cache) == 500

    @pytest.mark.parametrize("value", [0, "", [], False])
    def test_falsy_values_are_cached(self, clock, value):
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("k", value)
        assert cache.get("k", "missing") == value
