"""Tests for the persisted TTL caches."""

from __future__ import annotations

import asyncio
import json

import pytest

from contour_engine.adapters.kv_store import MemoryKeyValueStore
from contour_engine.core.config import Settings
from contour_engine.services.cache_manager import (
    CACHE_KEY_PREFIX,
    CacheConfig,
    CacheManager,
    CacheStore,
    build_cache_manager,
)

# pylint: disable=missing-function-docstring


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _store(kv=None, clock=None, ttl=60, max_entries=3, enabled=True) -> CacheStore:
    return CacheStore(
        CacheConfig(name="demo", ttl_seconds=ttl, max_entries=max_entries),
        kv if kv is not None else MemoryKeyValueStore(),
        enabled=enabled,
        clock=clock or FakeClock(),
    )


def test_hit_before_ttl_and_miss_at_ttl() -> None:
    """Entries are served while younger than the TTL and expire at it."""
    clock = FakeClock()
    store = _store(clock=clock, ttl=60)
    store.set("k", {"v": 1})
    clock.now += 59.9
    assert store.get("k") == {"v": 1}
    clock.now += 0.1
    assert store.get("k") is None
    assert "k" not in store.keys()


def test_blob_shape_in_kv() -> None:
    """A namespace is persisted as one JSON blob of entries."""
    kv = MemoryKeyValueStore()
    store = _store(kv=kv)
    store.set("hello", "world")
    raw = kv.get(f"{CACHE_KEY_PREFIX}demo")
    assert raw is not None
    blob = json.loads(raw)
    assert blob["entries"]["hello"]["payload"] == "world"
    assert blob["entries"]["hello"]["timestamp"] == 1_000.0


def test_load_drops_expired_entries() -> None:
    """Expired entries are removed when a namespace is loaded."""
    kv = MemoryKeyValueStore()
    clock = FakeClock()
    first = _store(kv=kv, clock=clock, ttl=10)
    first.set("old", 1)
    clock.now += 5
    first.set("new", 2)
    clock.now += 6

    second = _store(kv=kv, clock=clock, ttl=10)
    second.load()
    assert second.keys() == ["new"]
    assert "old" not in json.loads(kv.get(f"{CACHE_KEY_PREFIX}demo") or "{}")["entries"]


def test_corrupt_blob_starts_empty() -> None:
    """Unparsable persisted data leaves the namespace empty."""
    kv = MemoryKeyValueStore({f"{CACHE_KEY_PREFIX}demo": "{not json"})
    store = _store(kv=kv)
    store.load()
    assert store.keys() == []
    store.set("k", 1)
    assert store.get("k") == 1


def test_oldest_entries_evicted_over_capacity() -> None:
    """Exceeding max_entries removes the oldest entries first."""
    clock = FakeClock()
    store = _store(clock=clock, max_entries=2)
    for key in ("a", "b", "c"):
        store.set(key, key)
        clock.now += 1
    assert sorted(store.keys()) == ["b", "c"]
    assert store.stats()["stats"]["evictions"] == 1


def test_disabled_store_never_hits() -> None:
    """A disabled cache stores nothing and always misses."""
    kv = MemoryKeyValueStore()
    store = _store(kv=kv, enabled=False)
    store.set("k", 1)
    assert store.lookup("k") == (False, None)
    assert kv.get(f"{CACHE_KEY_PREFIX}demo") is None


def test_none_payload_is_a_hit() -> None:
    """lookup distinguishes a cached None from a miss."""
    store = _store()
    store.set("k", None)
    assert store.lookup("k") == (True, None)


def test_get_or_fetch_caches_result() -> None:
    """The fetcher runs once; the second call is served from cache."""
    store = _store()
    calls: list[str] = []

    async def fetch() -> str:
        calls.append("x")
        return "value"

    async def run() -> list[tuple[str, bool]]:
        return [await store.get_or_fetch("k", fetch), await store.get_or_fetch("k", fetch)]

    assert asyncio.run(run()) == [("value", False), ("value", True)]
    assert calls == ["x"]


def test_get_or_fetch_does_not_store_failures() -> None:
    """A failing fetcher propagates and leaves nothing cached."""
    store = _store()

    async def fetch() -> str:
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        asyncio.run(store.get_or_fetch("k", fetch))
    assert store.keys() == []


def test_discard_and_clear() -> None:
    """Single entries and whole namespaces can be removed."""
    kv = MemoryKeyValueStore()
    store = _store(kv=kv)
    store.set("a", 1)
    store.set("b", 2)
    store.discard("a")
    assert store.keys() == ["b"]
    store.clear()
    assert store.keys() == []
    assert kv.get(f"{CACHE_KEY_PREFIX}demo") is None


def test_build_cache_manager_registers_namespaces(monkeypatch) -> None:
    """The manager carries the dictionary, translation and currency caches."""
    monkeypatch.setenv("CACHE_CURRENCY_TTL_SECONDS", "120")
    manager = build_cache_manager(MemoryKeyValueStore(), Settings(_env_file=None))
    assert sorted(manager.cache_names()) == ["currency", "dictionary", "translation"]
    assert manager.cache("currency").ttl_seconds == 120


def test_manager_clear_unknown_namespace() -> None:
    """Clearing an unregistered namespace raises KeyError."""
    manager = CacheManager(MemoryKeyValueStore())
    manager.register(CacheConfig(name="demo", ttl_seconds=5))
    with pytest.raises(KeyError):
        manager.clear_cache("missing")
    manager.clear_cache("demo")
    assert manager.stats()["caches"]["demo"]["entry_count"] == 0
