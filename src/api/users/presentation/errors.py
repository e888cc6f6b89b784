"""Translation of pipeline and domain errors into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status

from shared_kernel.mediator import (
    OperationCancelledError,
    RequestValidationError,
    TransientError,
)
from users.domain.value_objects import UserId
from users.ports.exceptions import DuplicateEmailError, UserNotFoundError


def parse_user_id(user_id: str) -> UserId:
    """Parse a path parameter into a UserId.

    Raises:
        HTTPException: 400 if the id is not a valid ULID
    """
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format",
        )


def to_http_exception(error: Exception, failure_detail: str) -> HTTPException:
    """Map an error raised by the mediator to the HTTP response it deserves.

    Args:
        error: Exception raised while dispatching a request
        failure_detail: Generic message used for unexpected errors

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, RequestValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail={
                "message": "Validation failed",
                "errors": [
                    {"field": failure.field, "message": failure.message}
                    for failure in error.failures
                ],
            },
        )
    if isinstance(error, UserNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    if isinstance(error, DuplicateEmailError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error),
        )
    if isinstance(error, (TransientError, TimeoutError, ConnectionError)):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable, please retry",
        )
    if isinstance(error, OperationCancelledError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Request was cancelled",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=failure_detail,
    )
