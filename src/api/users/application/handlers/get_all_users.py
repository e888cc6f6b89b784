"""Handler for GetAllUsersQuery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from users.application.dtos import UserDto

if TYPE_CHECKING:
    from shared_kernel.mediator import CancellationToken
    from users.application.queries import GetAllUsersQuery
    from users.ports.repositories import IUserRepository


class GetAllUsersHandler:
    """Lists every user in repository order."""

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def handle(
        self, request: GetAllUsersQuery, token: CancellationToken
    ) -> list[UserDto]:
        users = await self._user_repository.get_all(token)
        return [UserDto.from_domain(user) for user in users]
