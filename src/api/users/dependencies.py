"""Dependency injection for the users bounded context.

Composes shared infrastructure (cache, message bus) with users-specific
components (repository, handlers) behind the mediator.
"""

from functools import lru_cache

from infrastructure.dependencies import create_mediator, get_message_bus
from shared_kernel.mediator import CancellationToken, Mediator
from users.application import register_user_handlers
from users.infrastructure import InMemoryUserRepository
from users.ports.exceptions import DuplicateEmailError, UserNotFoundError
from users.ports.repositories import IUserRepository


@lru_cache
def get_user_repository() -> IUserRepository:
    """Get the process-lifetime user repository (singleton).

    Returns:
        In-memory user repository
    """
    return InMemoryUserRepository()


@lru_cache
def get_mediator() -> Mediator:
    """Get the application mediator with every users request registered.

    The registry is built once, on first use.

    Returns:
        Mediator instance
    """
    mediator = create_mediator(
        expected_errors=(UserNotFoundError, DuplicateEmailError),
    )
    register_user_handlers(
        mediator,
        user_repository=get_user_repository(),
        message_bus=get_message_bus(),
    )
    return mediator


def get_cancellation_token() -> CancellationToken:
    """Get a fresh cancellation token for the current request."""
    return CancellationToken()
