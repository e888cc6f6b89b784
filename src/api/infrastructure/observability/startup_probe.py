"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_started(self, name: str, version: str, environment: str) -> None:
        """Record that the application finished starting."""
        ...

    def event_handlers_subscribed(self, email_notifications: bool) -> None:
        """Record that domain event subscribers were attached."""
        ...

    def event_handlers_disabled(self) -> None:
        """Record that event subscribers are disabled by configuration."""
        ...

    def application_stopping(self) -> None:
        """Record that shutdown began."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, name: str, version: str, environment: str) -> None:
        """Record that the application finished starting."""
        self._logger.info(
            "application_started",
            name=name,
            version=version,
            environment=environment,
            **self._get_context_kwargs(),
        )

    def event_handlers_subscribed(self, email_notifications: bool) -> None:
        """Record that domain event subscribers were attached."""
        self._logger.info(
            "event_handlers_subscribed",
            email_notifications=email_notifications,
            **self._get_context_kwargs(),
        )

    def event_handlers_disabled(self) -> None:
        """Record that event subscribers are disabled by configuration."""
        self._logger.info(
            "event_handlers_disabled",
            **self._get_context_kwargs(),
        )

    def application_stopping(self) -> None:
        """Record that shutdown began."""
        self._logger.info(
            "application_stopping",
            **self._get_context_kwargs(),
        )
