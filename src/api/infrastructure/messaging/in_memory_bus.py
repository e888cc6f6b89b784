"""In-process implementation of IMessageBus.

Fire-and-forget: publish() schedules one task per subscriber and returns
immediately. A failing subscriber is logged and never affects the publisher
or the other subscribers.
"""

from __future__ import annotations

import asyncio
import threading
from collections import defaultdict
from typing import Any

from infrastructure.observability import DefaultMessageBusProbe, MessageBusProbe
from shared_kernel.messaging import MessageHandler


def _subscriber_name(handler: MessageHandler) -> str:
    name = getattr(handler, "__qualname__", None)
    if name is None:
        name = type(handler).__qualname__
    return name


class InMemoryMessageBus:
    """Publish/subscribe bus dispatching on the exact message class."""

    def __init__(self, probe: MessageBusProbe | None = None):
        self._subscribers: dict[type, list[MessageHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._pending: set[asyncio.Task[None]] = set()
        self._probe = probe or DefaultMessageBusProbe()

    async def subscribe(self, message_type: type, handler: MessageHandler) -> None:
        with self._lock:
            self._subscribers[message_type].append(handler)
        self._probe.subscriber_registered(
            message_type.__name__, _subscriber_name(handler)
        )

    async def publish(self, message: Any) -> None:
        message_type = type(message)
        with self._lock:
            handlers = list(self._subscribers.get(message_type, ()))

        for handler in handlers:
            task = asyncio.create_task(self._deliver(message, handler))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        self._probe.message_published(message_type.__name__, len(handlers))

    async def _deliver(self, message: Any, handler: MessageHandler) -> None:
        try:
            await handler(message)
        except Exception as e:
            self._probe.delivery_failed(
                type(message).__name__, _subscriber_name(handler), e
            )

    def subscriber_count(self, message_type: type) -> int:
        with self._lock:
            return len(self._subscribers.get(message_type, ()))

    @property
    def pending_deliveries(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished.

        Deliveries scheduled by subscribers while draining are awaited too.
        """
        pending = len(self._pending)
        while self._pending:
            await asyncio.gather(*list(self._pending))
        self._probe.bus_drained(pending)
