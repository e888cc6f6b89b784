"""Secrets port shared by configuration consumers and the secret manager."""

from shared_kernel.secrets.ports import ISecretProvider, SecretNotFoundError

__all__ = ["ISecretProvider", "SecretNotFoundError"]
