"""Validators for the users commands and queries."""

from __future__ import annotations

from collections.abc import Sequence

from shared_kernel.mediator import Rule, Validator
from shared_kernel.mediator.validation import (
    email_shape,
    is_member,
    is_ulid,
    max_length,
    not_blank,
)
from users.application.commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from users.application.queries import GetUserQuery
from users.domain.value_objects import UserType

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

_USER_FIELD_RULES = (
    Rule("name", not_blank, "Name is required"),
    Rule(
        "name",
        max_length(NAME_MAX_LENGTH),
        f"Name must not exceed {NAME_MAX_LENGTH} characters",
    ),
    Rule("email", not_blank, "Email is required"),
    Rule("email", email_shape, "Email must be a valid email address"),
    Rule(
        "email",
        max_length(EMAIL_MAX_LENGTH),
        f"Email must not exceed {EMAIL_MAX_LENGTH} characters",
    ),
    Rule("type", is_member(UserType), "Invalid user type"),
)

_ID_RULES = (
    Rule("id", not_blank, "User ID is required"),
    Rule("id", lambda value: not not_blank(value) or is_ulid(value), "Invalid user ID"),
)


class CreateUserCommandValidator(Validator[CreateUserCommand]):
    def rules(self) -> Sequence[Rule]:
        return _USER_FIELD_RULES


class UpdateUserCommandValidator(Validator[UpdateUserCommand]):
    def rules(self) -> Sequence[Rule]:
        return _ID_RULES + _USER_FIELD_RULES


class DeleteUserCommandValidator(Validator[DeleteUserCommand]):
    def rules(self) -> Sequence[Rule]:
        return _ID_RULES


class GetUserQueryValidator(Validator[GetUserQuery]):
    def rules(self) -> Sequence[Rule]:
        return _ID_RULES
