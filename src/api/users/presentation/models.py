"""Pydantic models for user API requests and responses."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from users.application.dtos import UserDto

T = TypeVar("T")


class CreateUserRequest(BaseModel):
    """Request model for creating a user.

    Fields are not constrained here; the pipeline validators report every
    problem with the input in one response.
    """

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    type: str = Field(
        default="",
        description="Kind of account (admin, employee, manager, contractor, guest)",
    )


class UpdateUserRequest(BaseModel):
    """Request model for replacing a user's name, email and type."""

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    type: str = Field(default="", description="Kind of account")


class UserResponse(BaseModel):
    """Response model for a user."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    type: str = Field(..., description="Kind of account")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime | None = Field(
        default=None, description="Last modification timestamp (UTC)"
    )

    @classmethod
    def from_dto(cls, user: UserDto) -> UserResponse:
        """Convert a UserDto to an API response."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            type=user.type,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ValidationErrorItem(BaseModel):
    """One rejected field of a request."""

    field: str
    message: str


class PagedResponse(BaseModel, Generic[T]):
    """One page of a list resource."""

    data: list[T] = Field(default_factory=list)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_count: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_items(
        cls, items: list[T], page: int, page_size: int
    ) -> PagedResponse[T]:
        """Slice a complete list into the requested page."""
        total_count = len(items)
        total_pages = math.ceil(total_count / page_size)
        start = (page - 1) * page_size
        return cls(
            data=items[start : start + page_size],
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class UserMetadata(BaseModel):
    """Derived information about a user."""

    profile_completeness: float = Field(
        ..., description="Percentage of profile fields filled in"
    )
    account_age_days: int = Field(..., description="Whole days since creation")


class UserDetailResponse(BaseModel):
    """Response model for a user with derived metadata."""

    user: UserResponse
    metadata: UserMetadata

    @classmethod
    def from_dto(
        cls, user: UserDto, now: datetime | None = None
    ) -> UserDetailResponse:
        """Build the detail view of a user."""
        now = now or datetime.now(UTC)
        fields = (user.name, user.email)
        completed = sum(1 for value in fields if value and value.strip())
        return cls(
            user=UserResponse.from_dto(user),
            metadata=UserMetadata(
                profile_completeness=completed / len(fields) * 100,
                account_age_days=max((now - user.created_at).days, 0),
            ),
        )
