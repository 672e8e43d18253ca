"""Tests for the in-memory cache."""

from datetime import UTC, datetime, timedelta

from macro_match.services.cache import InMemoryCache


def test_cache_expires_entries() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    clock = {"now": now}
    cache = InMemoryCache(clock=lambda: clock["now"])

    cache.set("a", 1, ttl_seconds=10)
    assert cache.get("a") == 1

    clock["now"] = now + timedelta(seconds=10)
    assert cache.get("a") is None
    assert cache.get("missing") is None


def test_set_purges_expired_entries() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    clock = {"now": now}
    cache = InMemoryCache(clock=lambda: clock["now"])
    cache.set("old", 1, ttl_seconds=5)

    clock["now"] = now + timedelta(seconds=6)
    cache.set("new", 2, ttl_seconds=5)

    assert len(cache) == 1
    assert cache.get("new") == 2
