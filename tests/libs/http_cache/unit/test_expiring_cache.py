"""Unit tests for ExpiringCache TTL, LRU eviction and recency behaviour."""

import pytest

from http_cache import ExpiringCache, InvalidCapacityError, InvalidTTLError
from provider_payloads import FakeClock


def _cache(clock: FakeClock, capacity: int = 3, ttl: float = 60.0) -> ExpiringCache[str]:
    return ExpiringCache(capacity, ttl, name="test", clock=clock)


class TestConstruction:
    def test_rejects_zero_capacity(self, fake_clock):
        with pytest.raises(InvalidCapacityError, match="positive"):
            ExpiringCache(0, 10, clock=fake_clock)

    def test_rejects_negative_default_ttl(self, fake_clock):
        with pytest.raises(InvalidTTLError, match="default_ttl_seconds"):
            ExpiringCache(10, -1, clock=fake_clock)

    def test_set_rejects_negative_ttl(self, fake_clock):
        cache = _cache(fake_clock)
        with pytest.raises(InvalidTTLError):
            cache.set("a", "1", ttl_seconds=-5)


class TestExpiry:
    def test_get_returns_value_before_expiry(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "alpha")
        fake_clock.advance(59.0)
        assert cache.get("a") == "alpha"

    def test_entry_is_live_exactly_at_deadline(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "alpha")
        fake_clock.advance(60.0)
        assert cache.get("a") == "alpha"

    def test_get_after_ttl_returns_none_and_evicts(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "alpha")
        fake_clock.advance(60.5)

        assert cache.get("a") is None
        assert len(cache) == 0

    def test_per_entry_ttl_overrides_default(self, fake_clock):
        cache = _cache(fake_clock, ttl=60.0)
        cache.set("short", "s", ttl_seconds=5)
        cache.set("long", "l")
        fake_clock.advance(10)

        assert cache.get("short") is None
        assert cache.get("long") == "l"

    def test_replacing_a_key_resets_its_expiry(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "v1")
        fake_clock.advance(50)
        cache.set("a", "v2")
        fake_clock.advance(50)

        assert cache.get("a") == "v2"

    def test_contains_is_expiry_aware_and_does_not_evict(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "alpha")
        assert "a" in cache

        fake_clock.advance(61)
        assert "a" not in cache
        # Lazy expiry: the stale entry is only removed on read.
        assert len(cache) == 1


class TestEviction:
    def test_full_cache_evicts_exactly_one_oldest_entry(self, fake_clock):
        cache = _cache(fake_clock, capacity=3)
        for key in ("a", "b", "c"):
            cache.set(key, key.upper())

        cache.set("d", "D")

        assert len(cache) == 3
        assert cache.get("a") is None
        assert cache.keys() == ["b", "c", "d"]

    def test_read_refreshes_recency(self, fake_clock):
        cache = _cache(fake_clock, capacity=3)
        for key in ("a", "b", "c"):
            cache.set(key, key.upper())

        assert cache.get("a") == "A"
        cache.set("d", "D")

        assert cache.get("a") == "A"
        assert cache.get("b") is None

    def test_replacing_existing_key_at_capacity_evicts_nothing(self, fake_clock):
        cache = _cache(fake_clock, capacity=2)
        cache.set("a", "A")
        cache.set("b", "B")
        cache.set("a", "A2")

        assert len(cache) == 2
        assert cache.get("b") == "B"
        assert cache.get("a") == "A2"

    def test_delete_and_clear(self, fake_clock):
        cache = _cache(fake_clock)
        cache.set("a", "A")
        cache.set("b", "B")

        assert cache.delete("a") is True
        assert cache.delete("a") is False
        cache.clear()
        assert len(cache) == 0
