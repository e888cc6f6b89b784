"""Queries of the users context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from shared_kernel.mediator import Query
from users.application.commands import USERS_CACHE_REGION


@dataclass(frozen=True)
class GetUserQuery(Query):
    """Fetch one user by id. Result: UserDto or None."""

    cache_region: ClassVar[str] = USERS_CACHE_REGION

    id: str


@dataclass(frozen=True)
class GetAllUsersQuery(Query):
    """Fetch every user. Result: list of UserDto."""

    cache_region: ClassVar[str] = USERS_CACHE_REGION
