"""Cache adapters."""

from infrastructure.caching.memory_cache import CacheStats, MemoryCacheService

__all__ = ["CacheStats", "MemoryCacheService"]
