"""HTTP routes for user management (API version 2).

Version 2 pages the user list and enriches single-user reads with derived
metadata. Writes stay on version 1.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shared_kernel.mediator import CancellationToken, Mediator
from users.application import GetAllUsersQuery, GetUserQuery
from users.dependencies import get_cancellation_token, get_mediator
from users.presentation.errors import parse_user_id, to_http_exception
from users.presentation.models import (
    PagedResponse,
    UserDetailResponse,
    UserResponse,
)

MAX_PAGE_SIZE = 100

router = APIRouter(
    prefix="/users",
    tags=["users-v2"],
)


@router.get("")
async def list_users_paged(
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Users per page")
    ] = 10,
) -> PagedResponse[UserResponse]:
    """List users one page at a time."""
    try:
        users = await mediator.send(GetAllUsersQuery(), token)
    except Exception as e:
        raise to_http_exception(e, "Failed to list users") from e

    return PagedResponse[UserResponse].from_items(
        [UserResponse.from_dto(user) for user in users],
        page=page,
        page_size=page_size,
    )


@router.get("/{user_id}")
async def get_user_detail(
    user_id: str,
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> UserDetailResponse:
    """Get a user with profile completeness and account age.

    Raises:
        HTTPException: 400 if user ID is invalid
        HTTPException: 404 if user not found
    """
    user_id_obj = parse_user_id(user_id)

    try:
        user = await mediator.send(GetUserQuery(id=user_id_obj.value), token)
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user") from e

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserDetailResponse.from_dto(user)
