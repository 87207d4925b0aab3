# tests/test_cache_service.py
import pytest

from services.cache_service import TTLCache


@pytest.fixture
def clock(monkeypatch):
    """Controllable wall clock for the cache module."""
    now = [1_000.0]
    monkeypatch.setattr("services.cache_service.time.time", lambda: now[0])
    return now


def test_get_missing_key_returns_none():
    assert TTLCache(ttl=60, max_entries=5).get("nope") is None


def test_set_then_get(clock):
    c = TTLCache(ttl=60, max_entries=5)
    c.set("countries", [1, 2, 3])
    assert c.get("countries") == [1, 2, 3]


def test_entry_expires_after_ttl(clock):
    c = TTLCache(ttl=60, max_entries=5)
    c.set("countries", ["x"])

    clock[0] += 59
    assert c.get("countries") == ["x"]

    clock[0] += 1
    assert c.get("countries") is None
    assert len(c) == 0


def test_set_refreshes_timestamp(clock):
    c = TTLCache(ttl=60, max_entries=5)
    c.set("k", "old")
    clock[0] += 50
    c.set("k", "new")
    clock[0] += 50
    assert c.get("k") == "new"


def test_oldest_entry_evicted_when_full(clock):
    c = TTLCache(ttl=60, max_entries=2)
    c.set("a", 1)
    c.set("b", 2)
    c.set("c", 3)

    assert c.get("a") is None
    assert c.get("b") == 2
    assert c.get("c") == 3
    assert len(c) == 2


def test_expired_entries_purged_before_evicting_live_ones(clock):
    c = TTLCache(ttl=60, max_entries=2)
    c.set("a", 1)
    clock[0] += 30
    c.set("b", 2)
    clock[0] += 31  # "a" is now expired, "b" is not
    c.set("c", 3)

    assert c.get("b") == 2
    assert c.get("c") == 3


def test_overwriting_key_does_not_evict(clock):
    c = TTLCache(ttl=60, max_entries=2)
    c.set("a", 1)
    c.set("b", 2)
    c.set("a", 10)

    assert c.get("a") == 10
    assert c.get("b") == 2


def test_delete_and_clear():
    c = TTLCache(ttl=60, max_entries=5)
    c.set("a", 1)
    c.set("b", 2)
    c.delete("a")
    c.delete("missing")
    assert c.get("a") is None
    c.clear()
    assert len(c) == 0


def test_defaults_come_from_settings(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "cache_ttl_seconds", 42)
    monkeypatch.setattr(settings, "cache_max_entries", 3)
    c = TTLCache()
    assert c._ttl == 42
    assert c._max_entries == 3
