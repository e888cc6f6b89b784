"""User domain events.

Domain events related to the user lifecycle. They carry primitive values
only, so they can be published on the message bus without exposing the
aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserCreated:
    """Event raised when a new user is created.

    Attributes:
        user_id: The ULID of the created user
        name: Display name of the user
        email: Email address of the user
        user_type: The UserType value
        occurred_at: When the event occurred (UTC)
    """

    user_id: str
    name: str
    email: str
    user_type: str
    occurred_at: datetime


@dataclass(frozen=True)
class UserUpdated:
    """Event raised when a user's details change.

    Attributes:
        user_id: The ULID of the updated user
        name: Name after the update
        email: Email after the update
        user_type: UserType value after the update
        occurred_at: When the event occurred (UTC)
    """

    user_id: str
    name: str
    email: str
    user_type: str
    occurred_at: datetime


@dataclass(frozen=True)
class UserDeleted:
    """Event raised when a user is removed.

    Attributes:
        user_id: The ULID of the deleted user
        occurred_at: When the event occurred (UTC)
    """

    user_id: str
    occurred_at: datetime
