"""Command/query mediator with a behavior pipeline.

Requests are dispatched through Logging -> Validation -> Caching ->
Resiliency before reaching their handler.
"""

from shared_kernel.mediator.cancellation import CancellationToken
from shared_kernel.mediator.exceptions import (
    HandlerAlreadyRegisteredError,
    HandlerNotRegisteredError,
    OperationCancelledError,
    RequestValidationError,
    TransientError,
)
from shared_kernel.mediator.mediator import Mediator, Pipeline
from shared_kernel.mediator.requests import Command, Query, Request
from shared_kernel.mediator.validation import Rule, ValidationFailure, Validator

__all__ = [
    "CancellationToken",
    "Command",
    "HandlerAlreadyRegisteredError",
    "HandlerNotRegisteredError",
    "Mediator",
    "OperationCancelledError",
    "Pipeline",
    "Query",
    "Request",
    "RequestValidationError",
    "Rule",
    "TransientError",
    "ValidationFailure",
    "Validator",
]
