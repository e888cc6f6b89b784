"""Ports (interfaces) for the users bounded context.

Ports define the contracts for repositories and outbound services without
specifying implementation details. This allows for dependency inversion and
makes the domain layer independent of infrastructure.
"""

from users.ports.exceptions import (
    DuplicateEmailError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from users.ports.notifications import IEmailService
from users.ports.repositories import IUserRepository

__all__ = [
    "DuplicateEmailError",
    "IEmailService",
    "IUserRepository",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
