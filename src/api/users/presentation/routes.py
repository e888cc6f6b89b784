"""HTTP routes for user management (API version 1).

The router is mounted under both ``/api/v1`` and the unversioned ``/api``.
Every route turns its input into a command or query and sends it through
the mediator.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from shared_kernel.mediator import CancellationToken, Mediator
from users.application import (
    CreateUserCommand,
    DeleteUserCommand,
    GetAllUsersQuery,
    GetUserQuery,
    UpdateUserCommand,
)
from users.dependencies import get_cancellation_token, get_mediator
from users.presentation.errors import parse_user_id, to_http_exception
from users.presentation.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="List every user, oldest first",
    responses={
        200: {"description": "Users listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_users(
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> list[UserResponse]:
    """List all users."""
    try:
        users = await mediator.send(GetAllUsersQuery(), token)
    except Exception as e:
        raise to_http_exception(e, "Failed to list users") from e
    return [UserResponse.from_dto(user) for user in users]


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> UserResponse:
    """Get a user by ID.

    Args:
        user_id: User ID (ULID format)
        mediator: Request dispatcher
        token: Cancellation signal for this request

    Returns:
        UserResponse with user details

    Raises:
        HTTPException: 400 if user ID is invalid
        HTTPException: 404 if user not found
        HTTPException: 500 for unexpected errors
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
    return UserResponse.from_dto(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created"},
        400: {"description": "Email already in use"},
        422: {"description": "Invalid input"},
    },
)
async def create_user(
    body: CreateUserRequest,
    request: Request,
    response: Response,
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> UserResponse:
    """Create a user.

    Returns:
        UserResponse of the created user, with its URL in the Location header

    Raises:
        HTTPException: 400 if the email is already in use
        HTTPException: 422 listing every invalid field
        HTTPException: 500 for unexpected errors
    """
    try:
        user = await mediator.send(
            CreateUserCommand(name=body.name, email=body.email, type=body.type),
            token,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to create user") from e

    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{user.id}"
    return UserResponse.from_dto(user)


@router.put(
    "/{user_id}",
    responses={
        200: {"description": "User updated"},
        400: {"description": "Invalid user ID or email already in use"},
        404: {"description": "User not found"},
        422: {"description": "Invalid input"},
    },
)
async def update_user(
    user_id: str,
    body: UpdateUserRequest,
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> UserResponse:
    """Replace a user's name, email and type."""
    user_id_obj = parse_user_id(user_id)

    try:
        user = await mediator.send(
            UpdateUserCommand(
                id=user_id_obj.value,
                name=body.name,
                email=body.email,
                type=body.type,
            ),
            token,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to update user") from e

    return UserResponse.from_dto(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "User deleted"},
        400: {"description": "Invalid user ID"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: str,
    mediator: Annotated[Mediator, Depends(get_mediator)],
    token: Annotated[CancellationToken, Depends(get_cancellation_token)],
) -> Response:
    """Delete a user."""
    user_id_obj = parse_user_id(user_id)

    try:
        await mediator.send(DeleteUserCommand(id=user_id_obj.value), token)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete user") from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
