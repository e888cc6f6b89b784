"""Registration of the users requests on the mediator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from users.application.commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from users.application.handlers import (
    CreateUserHandler,
    DeleteUserHandler,
    GetAllUsersHandler,
    GetUserHandler,
    UpdateUserHandler,
)
from users.application.observability import (
    DefaultUserHandlerProbe,
    UserHandlerProbe,
)
from users.application.queries import GetAllUsersQuery, GetUserQuery
from users.application.validators import (
    CreateUserCommandValidator,
    DeleteUserCommandValidator,
    GetUserQueryValidator,
    UpdateUserCommandValidator,
)

if TYPE_CHECKING:
    from shared_kernel.mediator import Mediator
    from shared_kernel.messaging import IMessageBus
    from users.ports.repositories import IUserRepository


def register_user_handlers(
    mediator: Mediator,
    user_repository: IUserRepository,
    message_bus: IMessageBus,
    probe: UserHandlerProbe | None = None,
) -> None:
    """Register every users command and query with its validators.

    Raises:
        HandlerAlreadyRegisteredError: If called twice on the same mediator
    """
    probe = probe or DefaultUserHandlerProbe()

    mediator.register(
        CreateUserCommand,
        CreateUserHandler(user_repository, message_bus, probe=probe),
        validators=[CreateUserCommandValidator()],
    )
    mediator.register(
        UpdateUserCommand,
        UpdateUserHandler(user_repository, message_bus, probe=probe),
        validators=[UpdateUserCommandValidator()],
    )
    mediator.register(
        DeleteUserCommand,
        DeleteUserHandler(user_repository, message_bus, probe=probe),
        validators=[DeleteUserCommandValidator()],
    )
    mediator.register(
        GetUserQuery,
        GetUserHandler(user_repository),
        validators=[GetUserQueryValidator()],
    )
    mediator.register(GetAllUsersQuery, GetAllUsersHandler(user_repository))
