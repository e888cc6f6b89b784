"""User aggregate for the users context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from users.domain.events import UserCreated, UserUpdated
from users.domain.value_objects import UserId, UserType

if TYPE_CHECKING:
    from users.domain.events import DomainEvent


@dataclass
class User:
    """User aggregate representing a person with an account in the system.

    Business rules:
    - Name and email must never be blank
    - The id and created_at never change after creation
    - updated_at is None until the first mutation and never moves backwards
    - Email uniqueness is enforced by the repository, not here

    Event collection:
    - create() records UserCreated
    - Mutations record a single UserUpdated per batch of changes
    - Events are drained with collect_events() and published by the
      application layer after the change is stored
    """

    id: UserId
    name: str
    email: str
    type: UserType
    created_at: datetime
    updated_at: datetime | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self._validate_not_blank("name", self.name)
        self._validate_not_blank("email", self.email)
        if not isinstance(self.type, UserType):
            raise TypeError(f"type must be UserType, got {type(self.type).__name__}")

    @staticmethod
    def _validate_not_blank(field_name: str, value: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"User {field_name} cannot be blank")

    @classmethod
    def create(cls, name: str, email: str, type: UserType) -> User:
        """Factory method for creating a new user.

        Generates the ID and creation timestamp and records the UserCreated
        event.

        Args:
            name: Display name (non-blank)
            email: Email address (non-blank)
            type: Kind of account

        Returns:
            A new User aggregate with UserCreated event recorded

        Raises:
            ValueError: If name or email is blank
        """
        now = datetime.now(UTC)
        user = cls(
            id=UserId.generate(),
            name=name,
            email=email,
            type=type,
            created_at=now,
        )
        user._pending_events.append(
            UserCreated(
                user_id=user.id.value,
                name=user.name,
                email=user.email,
                user_type=user.type.value,
                occurred_at=now,
            )
        )
        return user

    def update_name(self, name: str) -> None:
        """Rename the user.

        Raises:
            ValueError: If name is blank
        """
        self._validate_not_blank("name", name)
        self.name = name
        self._touch()

    def update_email(self, email: str) -> None:
        """Change the user's email address.

        Raises:
            ValueError: If email is blank
        """
        self._validate_not_blank("email", email)
        self.email = email
        self._touch()

    def update_type(self, type: UserType) -> None:
        """Change the kind of account."""
        if not isinstance(type, UserType):
            raise TypeError(f"type must be UserType, got {type.__class__.__name__}")
        self.type = type
        self._touch()

    def has_email(self, email: str) -> bool:
        """Case-insensitive email comparison."""
        return self.email.casefold() == email.casefold()

    def _touch(self) -> None:
        now = datetime.now(UTC)
        floor = self.updated_at or self.created_at
        if now < floor:
            now = floor
        self.updated_at = now
        self._record_update(now)

    def _record_update(self, occurred_at: datetime) -> None:
        event = UserUpdated(
            user_id=self.id.value,
            name=self.name,
            email=self.email,
            user_type=self.type.value,
            occurred_at=occurred_at,
        )
        # Consecutive mutations collapse into one event
        if self._pending_events and isinstance(self._pending_events[-1], UserUpdated):
            self._pending_events[-1] = event
        else:
            self._pending_events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = list(self._pending_events)
        self._pending_events.clear()
        return events

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.name})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
