"""Data transfer objects returned by the users handlers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from users.domain.aggregates import User


@dataclass(frozen=True)
class UserDto:
    """Immutable snapshot of a user, safe to cache and share."""

    id: str
    name: str
    email: str
    type: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> UserDto:
        """Convert a User aggregate to a DTO."""
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email,
            type=user.type.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
