"""In-memory implementation of IUserRepository.

Process-lifetime storage for User aggregates, safe under concurrent access
from many request tasks (and threads).
"""

from __future__ import annotations

import copy
import threading
from typing import TYPE_CHECKING

from users.domain.aggregates import User
from users.domain.value_objects import UserId
from users.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from users.ports.exceptions import (
    DuplicateEmailError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from users.ports.repositories import IUserRepository

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken


def _email_key(email: str) -> str:
    return email.casefold()


def _snapshot(user: User) -> User:
    """Independent copy of a user without pending domain events."""
    clone = copy.deepcopy(user)
    clone.collect_events()
    return clone


def _check(token: CancellationToken | None) -> None:
    if token is not None:
        token.raise_if_cancelled()


class InMemoryUserRepository(IUserRepository):
    """Dictionary-backed repository for User aggregates.

    The primary map is keyed by id; a secondary index maps the case-folded
    email to the owning id. Both are guarded by one lock that is never held
    across an await, which makes every operation atomic: insert-if-absent on
    add, replace-if-present on update, and the email uniqueness check happens
    in the same critical section as the write.

    Callers only ever receive copies. A handler's changes become visible to
    other requests when it calls update().
    """

    def __init__(self, probe: UserRepositoryProbe | None = None) -> None:
        """Initialize an empty repository.

        Args:
            probe: Optional domain probe for observability
        """
        self._users: dict[str, User] = {}
        self._email_index: dict[str, str] = {}
        self._lock = threading.Lock()
        self._probe = probe or DefaultUserRepositoryProbe()

    async def get_by_id(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> User | None:
        _check(token)
        with self._lock:
            stored = self._users.get(user_id.value)
            user = _snapshot(stored) if stored is not None else None

        if user is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return user

    async def get_by_email(
        self, email: str, token: CancellationToken | None = None
    ) -> User | None:
        _check(token)
        with self._lock:
            owner = self._email_index.get(_email_key(email))
            stored = self._users.get(owner) if owner is not None else None
            user = _snapshot(stored) if stored is not None else None

        if user is None:
            self._probe.email_not_found(email)
            return None

        self._probe.user_retrieved(user.id.value)
        return user

    async def get_all(self, token: CancellationToken | None = None) -> list[User]:
        _check(token)
        with self._lock:
            users = [_snapshot(user) for user in self._users.values()]

        users.sort(key=lambda u: (u.created_at, u.id.value))
        self._probe.users_listed(len(users))
        return users

    async def add(self, user: User, token: CancellationToken | None = None) -> User:
        """Insert a new user.

        Raises:
            UserAlreadyExistsError: If the id is already stored
            DuplicateEmailError: If another user holds the email
        """
        _check(token)
        key = _email_key(user.email)
        with self._lock:
            if user.id.value in self._users:
                raise UserAlreadyExistsError(user.id.value)
            if key in self._email_index:
                self._probe.duplicate_email(user.email)
                raise DuplicateEmailError(user.email)

            self._users[user.id.value] = _snapshot(user)
            self._email_index[key] = user.id.value

        self._probe.user_added(user.id.value, user.email)
        return user

    async def update(self, user: User, token: CancellationToken | None = None) -> User:
        """Replace the stored state of an existing user.

        Raises:
            UserNotFoundError: If the id is not stored
            DuplicateEmailError: If another user holds the new email
        """
        _check(token)
        new_key = _email_key(user.email)
        with self._lock:
            current = self._users.get(user.id.value)
            if current is None:
                self._probe.user_not_found(user.id.value)
                raise UserNotFoundError(user.id.value)

            owner = self._email_index.get(new_key)
            if owner is not None and owner != user.id.value:
                self._probe.duplicate_email(user.email)
                raise DuplicateEmailError(user.email)

            old_key = _email_key(current.email)
            if old_key != new_key:
                self._email_index.pop(old_key, None)
            self._email_index[new_key] = user.id.value
            self._users[user.id.value] = _snapshot(user)

        self._probe.user_updated(user.id.value)
        return user

    async def delete(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> bool:
        _check(token)
        with self._lock:
            removed = self._users.pop(user_id.value, None)
            if removed is not None:
                self._email_index.pop(_email_key(removed.email), None)

        if removed is None:
            self._probe.user_not_found(user_id.value)
            return False

        self._probe.user_deleted(user_id.value)
        return True

    async def exists(
        self, user_id: UserId, token: CancellationToken | None = None
    ) -> bool:
        _check(token)
        with self._lock:
            return user_id.value in self._users

    async def exists_by_email(
        self, email: str, token: CancellationToken | None = None
    ) -> bool:
        _check(token)
        with self._lock:
            return _email_key(email) in self._email_index

    async def count(self, token: CancellationToken | None = None) -> int:
        _check(token)
        with self._lock:
            return len(self._users)
