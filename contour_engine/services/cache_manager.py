"""TTL caches for remote resolution, persisted through a ``PersistentKV``.

Each namespace (dictionary, translation, currency) lives under a single key
holding ``{"entries": {key: {"payload": ..., "timestamp": ...}}}``. Entries are
served while younger than the namespace TTL, expired entries are dropped on
load, and the namespace is capped in size with oldest-first eviction.
"""

# pylint: disable=missing-function-docstring

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from contour_engine.core.config import Settings
from contour_engine.core.logging import get_logger, truncate_for_log
from contour_engine.core.ports import PersistentKV

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "contour-cache:"

Clock = Callable[[], float]


class CacheEntryModel(BaseModel):
    """A persisted cache entry; ``timestamp`` is in epoch seconds."""

    payload: Any
    timestamp: float


class CacheBlob(BaseModel):
    """On-disk shape of one cache namespace."""

    entries: Dict[str, CacheEntryModel] = Field(default_factory=dict)


@dataclass(slots=True)
class CacheStats:
    """Mutable counters for cache operations."""

    hits: int = 0
    misses: int = 0
    stores: int = 0
    evictions: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
            "evictions": self.evictions,
        }


@dataclass(slots=True)
class CacheConfig:
    """Configuration for an individual cache namespace."""

    name: str
    ttl_seconds: int
    max_entries: int = 50


class CacheStore:
    """One TTL-bounded namespace backed by a single persisted blob."""

    def __init__(
        self,
        config: CacheConfig,
        kv: PersistentKV,
        *,
        enabled: bool = True,
        clock: Clock = time.time,
    ) -> None:
        self._config = config
        self._kv = kv
        self._enabled = enabled
        self._clock = clock
        self._stats = CacheStats()
        self._entries: dict[str, CacheEntryModel] = {}
        self._loaded = False

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def ttl_seconds(self) -> int:
        return self._config.ttl_seconds

    @property
    def storage_key(self) -> str:
        return f"{CACHE_KEY_PREFIX}{self.name}"

    def load(self) -> None:
        """Read the persisted blob, dropping expired entries.

        A missing, unreadable or malformed blob leaves the namespace empty.
        """
        self._loaded = True
        self._entries = {}
        try:
            raw = self._kv.get(self.storage_key)
        except OSError as exc:
            logger.warning("[cache] read failed name=%s: %s", self.name, exc)
            return
        if not raw:
            return
        try:
            blob = CacheBlob.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "[cache] corrupt blob name=%s; starting empty (%s)",
                self.name,
                truncate_for_log(raw),
            )
            return
        now = self._clock()
        fresh = {key: entry for key, entry in blob.entries.items() if not self._is_expired(entry, now)}
        dropped = len(blob.entries) - len(fresh)
        self._entries = fresh
        if dropped:
            self._stats.evictions += dropped
            logger.info("[cache] expired on load name=%s count=%d", self.name, dropped)
            self._persist()

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _is_expired(self, entry: CacheEntryModel, now: float) -> bool:
        return now - entry.timestamp >= self._config.ttl_seconds

    def _persist(self) -> None:
        blob = CacheBlob(entries=self._entries)
        try:
            self._kv.set(self.storage_key, blob.model_dump_json())
        except OSError as exc:
            logger.warning("[cache] write failed name=%s: %s", self.name, exc)

    def lookup(self, key: str) -> tuple[bool, Any]:
        """Return ``(found, payload)`` without treating ``None`` payloads as misses."""
        if not self._enabled:
            return False, None
        self._ensure_loaded()
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            logger.info("[cache] miss name=%s key=%s", self.name, truncate_for_log(key))
            return False, None
        now = self._clock()
        if self._is_expired(entry, now):
            self._entries.pop(key, None)
            self._stats.misses += 1
            self._stats.evictions += 1
            logger.info("[cache] expired name=%s key=%s", self.name, truncate_for_log(key))
            self._persist()
            return False, None
        self._stats.hits += 1
        logger.info(
            "[cache] hit name=%s key=%s age=%.1fs",
            self.name,
            truncate_for_log(key),
            now - entry.timestamp,
        )
        return True, entry.payload

    def get(self, key: str) -> Optional[Any]:
        _, payload = self.lookup(key)
        return payload

    def set(self, key: str, payload: Any) -> None:
        if not self._enabled:
            return
        self._ensure_loaded()
        self._entries[key] = CacheEntryModel(payload=payload, timestamp=self._clock())
        self._stats.stores += 1
        evicted = self._evict_if_needed()
        if evicted:
            logger.info(
                "[cache] eviction name=%s count=%d keys=%s",
                self.name,
                len(evicted),
                [truncate_for_log(k) for k in evicted],
            )
        logger.info(
            "[cache] store name=%s key=%s ttl=%ss",
            self.name,
            truncate_for_log(key),
            self._config.ttl_seconds,
        )
        self._persist()

    def _evict_if_needed(self) -> list[str]:
        overflow = len(self._entries) - self._config.max_entries
        if overflow <= 0:
            return []
        oldest = sorted(self._entries.items(), key=lambda item: item[1].timestamp)[:overflow]
        evicted = [key for key, _ in oldest]
        for key in evicted:
            self._entries.pop(key, None)
        self._stats.evictions += len(evicted)
        return evicted

    async def get_or_fetch(
        self, key: str, fetch: Callable[[], Awaitable[Any]]
    ) -> tuple[Any, bool]:
        """Return ``(payload, was_cached)``, fetching and storing on a miss.

        Errors raised by ``fetch`` propagate and nothing is stored.
        """
        found, payload = self.lookup(key)
        if found:
            return payload, True
        payload = await fetch()
        self.set(key, payload)
        return payload, False

    def keys(self) -> list[str]:
        self._ensure_loaded()
        return list(self._entries.keys())

    def discard(self, key: str) -> None:
        self._ensure_loaded()
        if self._entries.pop(key, None) is not None:
            logger.info("[cache] discard name=%s key=%s", self.name, truncate_for_log(key))
            self._persist()

    def clear(self) -> None:
        logger.info("[cache] clear name=%s", self.name)
        self._entries = {}
        self._loaded = True
        self._stats = CacheStats()
        try:
            self._kv.delete(self.storage_key)
        except OSError as exc:
            logger.warning("[cache] delete failed name=%s: %s", self.name, exc)

    def stats(self) -> dict[str, Any]:
        self._ensure_loaded()
        timestamps = [entry.timestamp for entry in self._entries.values()]
        return {
            "name": self.name,
            "enabled": self._enabled,
            "ttl_seconds": self._config.ttl_seconds,
            "max_entries": self._config.max_entries,
            "entry_count": len(self._entries),
            "oldest_entry_epoch": min(timestamps, default=None),
            "newest_entry_epoch": max(timestamps, default=None),
            "stats": self._stats.as_dict(),
        }


class CacheManager:
    """Registry of the resolution caches shared by the resolvers."""

    def __init__(self, kv: PersistentKV, *, enabled: bool = True, clock: Clock = time.time) -> None:
        self._kv = kv
        self._enabled = enabled
        self._clock = clock
        self._caches: Dict[str, CacheStore] = {}

    def register(self, cache_config: CacheConfig) -> CacheStore:
        if cache_config.name in self._caches:
            return self._caches[cache_config.name]
        store = CacheStore(cache_config, self._kv, enabled=self._enabled, clock=self._clock)
        store.load()
        self._caches[cache_config.name] = store
        return store

    def cache(self, name: str) -> CacheStore:
        return self._caches[name]

    def clear_all(self) -> None:
        logger.info("[cache] clearing all caches")
        for cache in self._caches.values():
            cache.clear()

    def clear_cache(self, name: str) -> None:
        cache = self._caches.get(name)
        if cache is None:
            raise KeyError(name)
        cache.clear()

    def stats(self) -> dict[str, Any]:
        return {
            "enabled": self._enabled,
            "caches": {name: cache.stats() for name, cache in self._caches.items()},
        }

    def cache_names(self) -> list[str]:
        return list(self._caches.keys())


DICTIONARY_CACHE = "dictionary"
TRANSLATION_CACHE = "translation"
CURRENCY_CACHE = "currency"


def build_cache_manager(
    kv: PersistentKV, settings: Settings, *, clock: Clock = time.time
) -> CacheManager:
    """Create the manager with the three resolution namespaces registered."""
    manager = CacheManager(kv, enabled=settings.CACHE_ENABLED, clock=clock)
    for name, ttl in (
        (DICTIONARY_CACHE, settings.CACHE_DICTIONARY_TTL_SECONDS),
        (TRANSLATION_CACHE, settings.CACHE_TRANSLATION_TTL_SECONDS),
        (CURRENCY_CACHE, settings.CACHE_CURRENCY_TTL_SECONDS),
    ):
        manager.register(
            CacheConfig(name=name, ttl_seconds=ttl, max_entries=settings.CACHE_MAX_ENTRIES)
        )
    return manager


__all__ = [
    "CACHE_KEY_PREFIX",
    "CURRENCY_CACHE",
    "DICTIONARY_CACHE",
    "TRANSLATION_CACHE",
    "CacheConfig",
    "CacheManager",
    "CacheStore",
    "build_cache_manager",
]
