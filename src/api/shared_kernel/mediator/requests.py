"""Request markers for the mediator pipeline.

Concrete requests are frozen dataclasses deriving from exactly one of
``Command`` (state-changing) or ``Query`` (read-only). The marker decides
how the caching behavior treats the request.
"""

from __future__ import annotations

from typing import ClassVar


class Request:
    """Base class for everything that can be dispatched through the mediator."""

    @classmethod
    def request_name(cls) -> str:
        """Name used in logs and cache keys."""
        return cls.__name__


class Command(Request):
    """A request describing a state-changing operation.

    Attributes:
        invalidates: Cache regions whose entries become stale once the
            command succeeds.
    """

    invalidates: ClassVar[tuple[str, ...]] = ()


class Query(Request):
    """A request describing a read-only operation.

    Query results are cacheable. ``cache_region`` groups cache keys so that
    commands can invalidate every cached read of the same resource.
    """

    cache_region: ClassVar[str] = "default"


def is_query(request: Request) -> bool:
    """Check whether a request is a cacheable read."""
    return isinstance(request, Query)


def is_command(request: Request) -> bool:
    """Check whether a request changes state."""
    return isinstance(request, Command)
