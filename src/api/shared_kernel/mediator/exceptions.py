"""Exceptions raised by the mediator pipeline.

Business errors (not found, duplicates) belong to the bounded contexts.
These exceptions cover the cross-cutting failures of the pipeline itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared_kernel.mediator.validation import ValidationFailure


class HandlerNotRegisteredError(Exception):
    """Raised when a request type has no handler registered with the mediator."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"No handler registered for {request_type.__name__}")


class HandlerAlreadyRegisteredError(Exception):
    """Raised when registering a second handler for the same request type."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"A handler is already registered for {request_type.__name__}")


class RequestValidationError(Exception):
    """Raised when one or more validation rules reject a request.

    Carries every failure found, not only the first one, so that callers can
    fix all of their input in one round trip.
    """

    def __init__(self, request_name: str, failures: list[ValidationFailure]) -> None:
        self.request_name = request_name
        self.failures = list(failures)
        messages = ", ".join(f.message for f in self.failures)
        super().__init__(f"Validation failed for {request_name}: {messages}")


class TransientError(Exception):
    """Raised by adapters for failures that may succeed when retried.

    Only this family (plus TimeoutError and ConnectionError) is retried by
    the resiliency behavior.
    """


class OperationCancelledError(Exception):
    """Raised when a request observes that its cancellation token was triggered."""
