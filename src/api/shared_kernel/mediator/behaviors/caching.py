"""Caching behavior: answers repeated queries from the cache.

Queries are looked up by a deterministic key derived from the request type
and its field values. Commands are never cached; once a command succeeds,
every cache region it declares in ``invalidates`` is cleared so that later
queries observe the write. Each region carries a generation number bumped on
invalidation; a query whose region was invalidated while it ran does not
keep its result, since it may have read the state from before the write.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections import defaultdict
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from shared_kernel.mediator.observability import DefaultPipelineProbe, PipelineProbe
from shared_kernel.mediator.requests import Command, Query

if TYPE_CHECKING:
    from shared_kernel.caching.ports import ICacheService
    from shared_kernel.mediator.cancellation import CancellationToken
    from shared_kernel.mediator.ports import NextStage
    from shared_kernel.mediator.requests import Request

DEFAULT_CACHE_TTL = timedelta(minutes=15)


def _request_fields(request: Request) -> dict[str, Any]:
    if dataclasses.is_dataclass(request):
        return dataclasses.asdict(request)
    return dict(vars(request))


def region_prefix(region: str, key_prefix: str = "") -> str:
    """Prefix shared by every key in a cache region."""
    return f"{key_prefix}{region}:"


def build_cache_key(request: Query, key_prefix: str = "") -> str:
    """Compute the cache key of a query.

    The key is ``{prefix}{region}:{RequestName}:{digest}`` where the digest
    is the SHA-256 of the request fields serialised as JSON with sorted keys,
    so equal requests always map to the same key.
    """
    payload = json.dumps(
        _request_fields(request),
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return (
        f"{region_prefix(request.cache_region, key_prefix)}"
        f"{request.request_name()}:{digest}"
    )


class CachingBehavior:
    """Read-through cache for queries, write invalidation for commands."""

    def __init__(
        self,
        cache: ICacheService,
        ttl: timedelta = DEFAULT_CACHE_TTL,
        enabled: bool = True,
        key_prefix: str = "",
        probe: PipelineProbe | None = None,
    ) -> None:
        self._cache = cache
        self._ttl = ttl
        self._enabled = enabled
        self._key_prefix = key_prefix
        self._probe = probe or DefaultPipelineProbe()
        self._generations: defaultdict[str, int] = defaultdict(int)

    async def handle(
        self,
        request: Request,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        if not self._enabled:
            return await next_()

        if isinstance(request, Query):
            return await self._handle_query(request, next_, token)

        response = await next_()
        if isinstance(request, Command):
            await self._invalidate(request)
        return response

    async def _handle_query(
        self,
        request: Query,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        token.raise_if_cancelled()
        request_name = request.request_name()
        region = request.cache_region
        key = build_cache_key(request, self._key_prefix)

        cached = await self._cache.get(key)
        if cached is not None:
            self._probe.cache_hit(request_name, key)
            return cached

        self._probe.cache_miss(request_name, key)
        generation = self._generations[region]
        response = await next_()

        # Absent results are not cached so a later create is seen immediately
        if response is None:
            return response

        if self._generations[region] == generation:
            await self._cache.set(key, response, self._ttl)
            if self._generations[region] == generation:
                self._probe.cache_stored(request_name, key, self._ttl.total_seconds())
                return response
            await self._cache.remove(key)

        self._probe.cache_store_discarded(request_name, key, region)
        return response

    async def _invalidate(self, request: Command) -> None:
        for region in request.invalidates:
            # Bumped before removal so in-flight queries drop what they read
            self._generations[region] += 1
            removed = await self._cache.remove_by_prefix(
                region_prefix(region, self._key_prefix)
            )
            self._probe.cache_invalidated(request.request_name(), region, removed)
