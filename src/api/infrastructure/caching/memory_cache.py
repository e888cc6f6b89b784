"""In-memory implementation of ICacheService.

Backed by a cachetools time-aware LRU cache so that every entry carries its
own expiry. Values are deep-copied on the way in and out, so no caller ever
shares a live object with the cache.
"""

from __future__ import annotations

import copy
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from cachetools import TLRUCache

from infrastructure.observability import CacheProbe, DefaultCacheProbe

DEFAULT_TTL = timedelta(minutes=15)


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl_seconds: float


def _time_to_use(key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl_seconds


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache counters."""

    hits: int
    misses: int
    size: int
    max_size: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


class MemoryCacheService:
    """Process-local cache with per-entry TTL and LRU eviction.

    Attributes are guarded by a lock so the service can be shared by every
    request task; the lock is never held across an await.
    """

    def __init__(
        self,
        max_size: int = 10_000,
        default_ttl: timedelta = DEFAULT_TTL,
        timer: Callable[[], float] = time.monotonic,
        probe: CacheProbe | None = None,
    ):
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries before LRU eviction
            default_ttl: Lifetime used when set() receives no ttl
            timer: Clock in seconds, injectable for tests
            probe: Optional domain probe for observability
        """
        self._cache: TLRUCache = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=timer
        )
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._lock = threading.Lock()
        self._probe = probe or DefaultCacheProbe()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        ttl_seconds = (ttl or self._default_ttl).total_seconds()
        if ttl_seconds <= 0:
            await self.remove(key)
            return

        entry = _Entry(value=copy.deepcopy(value), ttl_seconds=ttl_seconds)
        with self._lock:
            self._cache[key] = entry
        self._probe.entry_stored(key, ttl_seconds)

    async def remove(self, key: str) -> None:
        with self._lock:
            removed = self._cache.pop(key, None) is not None
        if removed:
            self._probe.entry_removed(key)

    async def remove_by_prefix(self, prefix: str) -> int:
        with self._lock:
            self._cache.expire()
            keys = [key for key in self._cache.keys() if key.startswith(prefix)]
            for key in keys:
                del self._cache[key]
        self._probe.prefix_removed(prefix, len(keys))
        return len(keys)

    async def clear(self) -> int:
        """Remove every entry and return how many were dropped."""
        with self._lock:
            removed = len(self._cache)
            self._cache.clear()
        self._probe.cache_cleared(removed)
        return removed

    def stats(self) -> CacheStats:
        """Return hit/miss counters and the current size."""
        with self._lock:
            self._cache.expire()
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._cache),
                max_size=self._max_size,
            )
