"""Handler for UpdateUserCommand."""

from __future__ import annotations

from typing import TYPE_CHECKING

from users.application.dtos import UserDto
from users.application.handlers.publishing import publish_events
from users.application.observability import (
    DefaultUserHandlerProbe,
    UserHandlerProbe,
)
from users.domain.value_objects import UserId, UserType
from users.ports.exceptions import DuplicateEmailError, UserNotFoundError

if TYPE_CHECKING:
    from shared_kernel.mediator import CancellationToken
    from shared_kernel.messaging import IMessageBus
    from users.application.commands import UpdateUserCommand
    from users.ports.repositories import IUserRepository


class UpdateUserHandler:
    """Replaces name, email and type of an existing user."""

    def __init__(
        self,
        user_repository: IUserRepository,
        message_bus: IMessageBus,
        probe: UserHandlerProbe | None = None,
    ):
        self._user_repository = user_repository
        self._message_bus = message_bus
        self._probe = probe or DefaultUserHandlerProbe()

    async def handle(self, request: UpdateUserCommand, token: CancellationToken) -> UserDto:
        """Apply the update.

        Raises:
            UserNotFoundError: If no user has the id
            DuplicateEmailError: If the new email belongs to another user
        """
        user_id = UserId.from_string(request.id)
        user = await self._user_repository.get_by_id(user_id, token)
        if user is None:
            self._probe.user_not_found(request.id)
            raise UserNotFoundError(request.id)

        if not user.has_email(request.email):
            owner = await self._user_repository.get_by_email(request.email, token)
            if owner is not None and owner.id != user.id:
                self._probe.duplicate_email_rejected(request.email)
                raise DuplicateEmailError(request.email)

        user.update_name(request.name)
        user.update_email(request.email)
        user.update_type(UserType(request.type))
        events = user.collect_events()

        await self._user_repository.update(user, token)

        self._probe.user_updated(user.id.value)
        await publish_events(self._message_bus, self._probe, user.id.value, events)
        return UserDto.from_domain(user)
