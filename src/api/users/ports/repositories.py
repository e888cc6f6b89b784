"""Repository protocols (ports) for the users bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Every method accepts an optional cancellation token that is
checked on entry only, so an operation that has started always completes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from users.domain.aggregates import User
from users.domain.value_objects import UserId

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Implementations own the canonical collection of users and hand out
    independent copies; changes become visible only through add/update.
    """

    async def get_by_id(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user
            token: Optional cancellation signal

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_email(
        self, email: str, token: CancellationToken | None = None
    ) -> User | None:
        """Retrieve a user by email, compared case-insensitively."""
        ...

    async def get_all(self, token: CancellationToken | None = None) -> list[User]:
        """List all users ordered by creation time, oldest first."""
        ...

    async def add(self, user: User, token: CancellationToken | None = None) -> User:
        """Insert a new user.

        Raises:
            UserAlreadyExistsError: If the id is already stored
            DuplicateEmailError: If another user holds the email
        """
        ...

    async def update(self, user: User, token: CancellationToken | None = None) -> User:
        """Replace the stored state of an existing user.

        Raises:
            UserNotFoundError: If the id is not stored
            DuplicateEmailError: If another user holds the new email
        """
        ...

    async def delete(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> bool:
        """Delete a user.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def exists(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> bool:
        """Check whether a user id is stored."""
        ...

    async def exists_by_email(
        self, email: str, token: CancellationToken | None = None
    ) -> bool:
        """Check whether any user holds the email, case-insensitively."""
        ...

    async def count(self, token: CancellationToken | None = None) -> int:
        """Number of stored users."""
        ...
