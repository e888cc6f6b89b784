"""Infrastructure adapters for the users bounded context."""

from users.infrastructure.in_memory_user_repository import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
