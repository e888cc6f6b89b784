"""Protocol (port) for the response cache.

The cache stores independent copies of values; callers never share a live
object with it.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ICacheService(Protocol):
    """Key/value cache with per-entry time-to-live."""

    async def get(self, key: str) -> Any | None:
        """Retrieve a cached value.

        Args:
            key: Cache key

        Returns:
            A copy of the cached value, or None if absent or expired
        """
        ...

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Value to store (copied)
            ttl: Time-to-live; the adapter default applies when None
        """
        ...

    async def remove(self, key: str) -> None:
        """Remove a key if present."""
        ...

    async def remove_by_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``.

        Returns:
            Number of keys removed
        """
        ...
