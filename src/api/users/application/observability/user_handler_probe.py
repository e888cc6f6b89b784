"""Protocol for users request handler observability.

Defines the interface for domain probes that capture application-level
domain events for the users command and query handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserHandlerProbe(Protocol):
    """Domain probe for users handler operations."""

    def user_created(self, user_id: str, email: str, user_type: str) -> None:
        """Record that a user was created."""
        ...

    def user_updated(self, user_id: str) -> None:
        """Record that a user was updated."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a command targeted an unknown user."""
        ...

    def duplicate_email_rejected(self, email: str) -> None:
        """Record that a command was rejected because the email is taken."""
        ...

    def events_published(self, user_id: str, event_types: list[str]) -> None:
        """Record that domain events were handed to the message bus."""
        ...

    def event_publish_failed(
        self, user_id: str, event_type: str, error: BaseException
    ) -> None:
        """Record that a committed change could not be announced on the bus."""
        ...

    def with_context(self, context: ObservationContext) -> UserHandlerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserHandlerProbe:
    """Default implementation of UserHandlerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserHandlerProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserHandlerProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, email: str, user_type: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            email=email,
            user_type=user_type,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str) -> None:
        """Record that a user was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a command targeted an unknown user."""
        self._logger.warning(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def duplicate_email_rejected(self, email: str) -> None:
        """Record that a command was rejected because the email is taken."""
        self._logger.warning(
            "user_duplicate_email_rejected",
            email=email,
            **self._get_context_kwargs(),
        )

    def events_published(self, user_id: str, event_types: list[str]) -> None:
        """Record that domain events were handed to the message bus."""
        self._logger.debug(
            "user_events_published",
            user_id=user_id,
            event_types=event_types,
            **self._get_context_kwargs(),
        )

    def event_publish_failed(
        self, user_id: str, event_type: str, error: BaseException
    ) -> None:
        """Record that a committed change could not be announced on the bus."""
        self._logger.error(
            "user_event_publish_failed",
            user_id=user_id,
            event_type=event_type,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
