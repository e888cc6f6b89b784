"""Protocol (port) for secret retrieval."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class SecretNotFoundError(Exception):
    """Raised when a secret is absent from every configured source."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Secret '{name}' not found in any provider")


@runtime_checkable
class ISecretProvider(Protocol):
    """Resolves named secrets from one or more sources."""

    async def get_secret(self, name: str) -> str:
        """Retrieve a secret value.

        Args:
            name: Secret name, sections separated by ``:`` (e.g. "Jwt:SecretKey")

        Returns:
            The secret value

        Raises:
            SecretNotFoundError: If no source holds the secret
        """
        ...

    async def set_secret(self, name: str, value: str) -> None:
        """Store a secret for later retrieval."""
        ...
