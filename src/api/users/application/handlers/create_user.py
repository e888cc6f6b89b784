"""Handler for CreateUserCommand."""

from __future__ import annotations

from typing import TYPE_CHECKING

from users.application.dtos import UserDto
from users.application.handlers.publishing import publish_events
from users.application.observability import (
    DefaultUserHandlerProbe,
    UserHandlerProbe,
)
from users.domain.aggregates import User
from users.domain.value_objects import UserType
from users.ports.exceptions import DuplicateEmailError

if TYPE_CHECKING:
    from shared_kernel.mediator import CancellationToken
    from shared_kernel.messaging import IMessageBus
    from users.application.commands import CreateUserCommand
    from users.ports.repositories import IUserRepository


class CreateUserHandler:
    """Creates a user after checking that the email is free."""

    def __init__(
        self,
        user_repository: IUserRepository,
        message_bus: IMessageBus,
        probe: UserHandlerProbe | None = None,
    ):
        """Initialize the handler.

        Args:
            user_repository: Repository for user persistence
            message_bus: Bus receiving the UserCreated event
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._message_bus = message_bus
        self._probe = probe or DefaultUserHandlerProbe()

    async def handle(self, request: CreateUserCommand, token: CancellationToken) -> UserDto:
        """Create the user.

        Raises:
            DuplicateEmailError: If any user already holds the email, in any case
        """
        if await self._user_repository.exists_by_email(request.email, token):
            self._probe.duplicate_email_rejected(request.email)
            raise DuplicateEmailError(request.email)

        user = User.create(
            name=request.name,
            email=request.email,
            type=UserType(request.type),
        )
        events = user.collect_events()

        # The repository re-checks the email atomically
        await self._user_repository.add(user, token)

        self._probe.user_created(user.id.value, user.email, user.type.value)
        await publish_events(self._message_bus, self._probe, user.id.value, events)
        return UserDto.from_domain(user)
