"""Subscribers reacting to users domain events."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from users.domain.events import UserCreated

if TYPE_CHECKING:
    from shared_kernel.messaging import IMessageBus
    from users.ports.notifications import IEmailService


class WelcomeEmailHandler:
    """Sends a welcome email when a user is created."""

    def __init__(
        self,
        email_service: IEmailService,
        enabled: bool = True,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        """Initialize the subscriber.

        Args:
            email_service: Outbound email sender
            enabled: Whether email notifications are switched on
            logger: Optional structlog logger
        """
        self._email_service = email_service
        self._enabled = enabled
        self._logger = logger or structlog.get_logger()

    async def __call__(self, event: UserCreated) -> None:
        if not self._enabled:
            self._logger.debug(
                "welcome_email_skipped",
                user_id=event.user_id,
                reason="email notifications disabled",
            )
            return
        await self._email_service.send_welcome_email(event.email, event.name)


async def subscribe_event_handlers(
    bus: IMessageBus,
    email_service: IEmailService,
    email_notifications_enabled: bool = True,
) -> None:
    """Attach the users subscribers to the message bus."""
    await bus.subscribe(
        UserCreated,
        WelcomeEmailHandler(email_service, enabled=email_notifications_enabled),
    )
