"""Protocol (port) for the message bus.

Delivery is fire-and-forget: publishing never waits for subscribers and a
failing subscriber never affects the publisher.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

MessageHandler = Callable[[Any], Awaitable[None]]


@runtime_checkable
class IMessageBus(Protocol):
    """Publish/subscribe bus keyed by message type."""

    async def publish(self, message: Any) -> None:
        """Publish a message to every subscriber of its type.

        Args:
            message: Message instance; its class selects the subscribers
        """
        ...

    async def subscribe(self, message_type: type, handler: MessageHandler) -> None:
        """Register an async handler for a message type.

        Args:
            message_type: Class of messages the handler receives
            handler: Coroutine function called with each message
        """
        ...
