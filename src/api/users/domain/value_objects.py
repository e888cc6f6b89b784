"""Value objects for the users domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: ULID string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


class UserType(StrEnum):
    """Kinds of user account.

    Closed set; requests naming any other value are rejected by validation.
    Lookup ignores case and accepts member names, so "Admin", "ADMIN" and
    "admin" all resolve to ADMIN.
    """

    ADMIN = "admin"
    EMPLOYEE = "employee"
    MANAGER = "manager"
    CONTRACTOR = "contractor"
    GUEST = "guest"

    @classmethod
    def _missing_(cls, value: object) -> UserType | None:
        if not isinstance(value, str):
            return None
        folded = value.strip().casefold()
        for member in cls:
            if folded in (member.value, member.name.casefold()):
                return member
        return None
