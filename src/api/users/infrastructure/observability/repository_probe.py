"""Domain probe for user repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user storage operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_added(self, user_id: str, email: str) -> None:
        """Record that a user was inserted."""
        ...

    def user_updated(self, user_id: str) -> None:
        """Record that a user was replaced."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was removed."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def email_not_found(self, email: str) -> None:
        """Record that no user holds an email."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that all users were listed."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that a write was rejected because the email is taken."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_added(self, user_id: str, email: str) -> None:
        self._logger.info(
            "user_added",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str) -> None:
        self._logger.info(
            "user_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def email_not_found(self, email: str) -> None:
        self._logger.debug(
            "user_email_not_found",
            email=email,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int) -> None:
        self._logger.debug(
            "users_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, email: str) -> None:
        self._logger.warning(
            "user_duplicate_email",
            email=email,
            **self._get_context_kwargs(),
        )
