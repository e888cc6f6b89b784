"""Declarative request validation.

A validator is a list of independent rules. Each rule reads one field of the
request, applies a side-effect free predicate and contributes a failure when
the predicate is false. All rules are evaluated; validation never stops at
the first failure.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from email_validator import EmailNotValidError, validate_email
from ulid import ULID

T = TypeVar("T")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class ValidationFailure:
    """A single field-level rule violation."""

    field: str
    message: str


@dataclass(frozen=True)
class Rule:
    """One validation rule bound to a request field.

    Attributes:
        field: Attribute name read from the request
        check: Predicate returning True when the value is acceptable
        message: Human-readable message reported on failure
    """

    field: str
    check: Predicate
    message: str

    def evaluate(self, request: Any) -> ValidationFailure | None:
        """Apply the rule to a request."""
        value = getattr(request, self.field, None)
        if self.check(value):
            return None
        return ValidationFailure(field=self.field, message=self.message)


class Validator(Generic[T]):
    """Base class for per-request rule sets.

    Subclasses declare their rules by overriding ``rules()``.
    """

    def rules(self) -> Sequence[Rule]:
        """Return the rules of this validator."""
        return ()

    async def validate(self, request: T) -> list[ValidationFailure]:
        """Evaluate every rule against the request.

        Returns:
            All failures, empty when the request is valid
        """
        failures = []
        for rule in self.rules():
            failure = rule.evaluate(request)
            if failure is not None:
                failures.append(failure)
        return failures


def not_blank(value: Any) -> bool:
    """Value is present and, for strings, not only whitespace."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(str(value).strip())


def max_length(limit: int) -> Predicate:
    """Build a predicate accepting strings up to ``limit`` characters."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        return len(str(value)) <= limit

    return check


def email_shape(value: Any) -> bool:
    """Value looks like an email address.

    Blank values pass; requiredness is a separate rule. Deliverability is
    not checked.
    """
    if not not_blank(value):
        return True
    try:
        validate_email(str(value), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_member(enum_type: type[Enum]) -> Predicate:
    """Build a predicate accepting members (or values) of an enumeration."""

    def check(value: Any) -> bool:
        if isinstance(value, enum_type):
            return True
        try:
            enum_type(value)
        except ValueError:
            return False
        return True

    return check


def is_ulid(value: Any) -> bool:
    """Value is a ULID string or wraps one in a ``value`` attribute."""
    raw = getattr(value, "value", value)
    if not isinstance(raw, str):
        return False
    try:
        ULID.from_str(raw)
    except ValueError:
        return False
    return True
