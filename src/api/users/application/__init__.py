"""Application layer of the users context.

Commands and queries, their handlers and validators, and the wiring that
registers them on the mediator.
"""

from users.application.commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from users.application.dtos import UserDto
from users.application.queries import GetAllUsersQuery, GetUserQuery
from users.application.registration import register_user_handlers

__all__ = [
    "CreateUserCommand",
    "DeleteUserCommand",
    "GetAllUsersQuery",
    "GetUserQuery",
    "UpdateUserCommand",
    "UserDto",
    "register_user_handlers",
]
