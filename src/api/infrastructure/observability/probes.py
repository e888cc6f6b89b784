"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class _StructlogProbe:
    """Shared logger and context handling of the default probes."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> Any:
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)


class CacheProbe(Protocol):
    """Domain probe for the response cache."""

    def entry_stored(self, key: str, ttl_seconds: float) -> None:
        """Record that a value was stored."""
        ...

    def entry_removed(self, key: str) -> None:
        """Record that a key was removed."""
        ...

    def prefix_removed(self, prefix: str, removed: int) -> None:
        """Record that every key under a prefix was removed."""
        ...

    def cache_cleared(self, removed: int) -> None:
        """Record that the cache was emptied."""
        ...

    def with_context(self, context: ObservationContext) -> CacheProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCacheProbe(_StructlogProbe):
    """Default implementation of CacheProbe using structlog."""

    def entry_stored(self, key: str, ttl_seconds: float) -> None:
        self._logger.debug(
            "cache_entry_stored",
            key=key,
            ttl_seconds=ttl_seconds,
            **self._get_context_kwargs(),
        )

    def entry_removed(self, key: str) -> None:
        self._logger.debug(
            "cache_entry_removed",
            key=key,
            **self._get_context_kwargs(),
        )

    def prefix_removed(self, prefix: str, removed: int) -> None:
        self._logger.debug(
            "cache_prefix_removed",
            prefix=prefix,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def cache_cleared(self, removed: int) -> None:
        self._logger.info(
            "cache_cleared",
            removed=removed,
            **self._get_context_kwargs(),
        )


class MessageBusProbe(Protocol):
    """Domain probe for the in-process message bus."""

    def subscriber_registered(self, message_type: str, subscriber: str) -> None:
        """Record that a subscriber was attached to a message type."""
        ...

    def message_published(self, message_type: str, subscriber_count: int) -> None:
        """Record that a message was handed to its subscribers."""
        ...

    def delivery_failed(
        self, message_type: str, subscriber: str, error: BaseException
    ) -> None:
        """Record that a subscriber raised while handling a message."""
        ...

    def bus_drained(self, pending: int) -> None:
        """Record that outstanding deliveries were awaited."""
        ...

    def with_context(self, context: ObservationContext) -> MessageBusProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMessageBusProbe(_StructlogProbe):
    """Default implementation of MessageBusProbe using structlog."""

    def subscriber_registered(self, message_type: str, subscriber: str) -> None:
        self._logger.info(
            "message_subscriber_registered",
            message_type=message_type,
            subscriber=subscriber,
            **self._get_context_kwargs(),
        )

    def message_published(self, message_type: str, subscriber_count: int) -> None:
        self._logger.info(
            "message_published",
            message_type=message_type,
            subscriber_count=subscriber_count,
            **self._get_context_kwargs(),
        )

    def delivery_failed(
        self, message_type: str, subscriber: str, error: BaseException
    ) -> None:
        self._logger.error(
            "message_delivery_failed",
            message_type=message_type,
            subscriber=subscriber,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def bus_drained(self, pending: int) -> None:
        self._logger.debug(
            "message_bus_drained",
            pending=pending,
            **self._get_context_kwargs(),
        )


class SecretProbe(Protocol):
    """Domain probe for secret resolution.

    Secret values are never passed to the probe.
    """

    def secret_resolved(self, name: str, source: str) -> None:
        """Record which source answered a secret lookup."""
        ...

    def secret_not_found(self, name: str) -> None:
        """Record that no source holds a secret."""
        ...

    def secret_stored(self, name: str) -> None:
        """Record that a secret was set at runtime."""
        ...

    def with_context(self, context: ObservationContext) -> SecretProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSecretProbe(_StructlogProbe):
    """Default implementation of SecretProbe using structlog."""

    def secret_resolved(self, name: str, source: str) -> None:
        self._logger.debug(
            "secret_resolved",
            name=name,
            source=source,
            **self._get_context_kwargs(),
        )

    def secret_not_found(self, name: str) -> None:
        self._logger.warning(
            "secret_not_found",
            name=name,
            **self._get_context_kwargs(),
        )

    def secret_stored(self, name: str) -> None:
        self._logger.info(
            "secret_stored",
            name=name,
            **self._get_context_kwargs(),
        )


class EmailProbe(Protocol):
    """Domain probe for outbound email."""

    def email_sent(self, to: str, subject: str) -> None:
        """Record that an email was sent."""
        ...

    def with_context(self, context: ObservationContext) -> EmailProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEmailProbe(_StructlogProbe):
    """Default implementation of EmailProbe using structlog."""

    def email_sent(self, to: str, subject: str) -> None:
        self._logger.info(
            "email_sent",
            to=to,
            subject=subject,
            **self._get_context_kwargs(),
        )
