"""Tests for the liveness rule."""

from keepalive_cache.core.entry import KEEPALIVE_FOREVER, CacheEntry, is_alive


def test_forever_entry_is_always_alive():
    entry = CacheEntry(value="v", created_at=0, keep_alive_millis=KEEPALIVE_FOREVER)
    assert is_alive(entry, 0)
    assert is_alive(entry, 10**15)


def test_entry_alive_before_boundary():
    entry = CacheEntry(value="v", created_at=1_000, keep_alive_millis=100)
    assert is_alive(entry, 1_000)
    assert is_alive(entry, 1_099)


def test_entry_dead_at_boundary():
    """The expiry instant itself is dead."""
    entry = CacheEntry(value="v", created_at=1_000, keep_alive_millis=100)
    assert not is_alive(entry, 1_100)
    assert not is_alive(entry, 5_000)
