"""Commands of the users context.

Commands carry raw presentation input; they are validated by the pipeline
before any handler sees them, so fields stay plain strings here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from shared_kernel.mediator import Command

USERS_CACHE_REGION = "users"


@dataclass(frozen=True)
class CreateUserCommand(Command):
    """Create a user. Result: UserDto."""

    invalidates: ClassVar[tuple[str, ...]] = (USERS_CACHE_REGION,)

    name: str
    email: str
    type: str


@dataclass(frozen=True)
class UpdateUserCommand(Command):
    """Replace name, email and type of an existing user. Result: UserDto."""

    invalidates: ClassVar[tuple[str, ...]] = (USERS_CACHE_REGION,)

    id: str
    name: str
    email: str
    type: str


@dataclass(frozen=True)
class DeleteUserCommand(Command):
    """Remove a user. Result: None."""

    invalidates: ClassVar[tuple[str, ...]] = (USERS_CACHE_REGION,)

    id: str
