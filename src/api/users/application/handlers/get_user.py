"""Handler for GetUserQuery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from users.application.dtos import UserDto
from users.domain.value_objects import UserId

if TYPE_CHECKING:
    from shared_kernel.mediator import CancellationToken
    from users.application.queries import GetUserQuery
    from users.ports.repositories import IUserRepository


class GetUserHandler:
    """Looks up one user; absence is a normal result, not an error."""

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def handle(self, request: GetUserQuery, token: CancellationToken) -> UserDto | None:
        user = await self._user_repository.get_by_id(UserId.from_string(request.id), token)
        if user is None:
            return None
        return UserDto.from_domain(user)
