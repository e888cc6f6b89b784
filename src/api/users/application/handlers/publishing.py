"""Publishing of collected domain events."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from shared_kernel.mediator.behaviors import TRANSIENT_ERRORS

if TYPE_CHECKING:
    from shared_kernel.messaging import IMessageBus
    from users.application.observability import UserHandlerProbe
    from users.domain.events import DomainEvent


async def publish_events(
    bus: IMessageBus,
    probe: UserHandlerProbe,
    user_id: str,
    events: Sequence[DomainEvent],
) -> None:
    """Hand events to the bus in the order they were recorded.

    Called after the repository write, so transport failures are recorded
    and not raised: a retry of the whole command would repeat a write that
    already happened.
    """
    if not events:
        return
    published = []
    for event in events:
        try:
            await bus.publish(event)
        except TRANSIENT_ERRORS as e:
            probe.event_publish_failed(user_id, type(event).__name__, e)
            continue
        published.append(type(event).__name__)
    if published:
        probe.events_published(user_id, published)
