"""Handler for DeleteUserCommand."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from users.application.handlers.publishing import publish_events
from users.application.observability import (
    DefaultUserHandlerProbe,
    UserHandlerProbe,
)
from users.domain.events import UserDeleted
from users.domain.value_objects import UserId
from users.ports.exceptions import UserNotFoundError

if TYPE_CHECKING:
    from shared_kernel.mediator import CancellationToken
    from shared_kernel.messaging import IMessageBus
    from users.application.commands import DeleteUserCommand
    from users.ports.repositories import IUserRepository


class DeleteUserHandler:
    """Removes a user."""

    def __init__(
        self,
        user_repository: IUserRepository,
        message_bus: IMessageBus,
        probe: UserHandlerProbe | None = None,
    ):
        self._user_repository = user_repository
        self._message_bus = message_bus
        self._probe = probe or DefaultUserHandlerProbe()

    async def handle(self, request: DeleteUserCommand, token: CancellationToken) -> None:
        """Delete the user.

        Raises:
            UserNotFoundError: If no user has the id, including when a
                concurrent delete removed it first
        """
        user_id = UserId.from_string(request.id)
        if not await self._user_repository.exists(user_id, token):
            self._probe.user_not_found(request.id)
            raise UserNotFoundError(request.id)

        if not await self._user_repository.delete(user_id, token):
            self._probe.user_not_found(request.id)
            raise UserNotFoundError(request.id)

        self._probe.user_deleted(request.id)
        event = UserDeleted(user_id=request.id, occurred_at=datetime.now(UTC))
        await publish_events(self._message_bus, self._probe, request.id, [event])
