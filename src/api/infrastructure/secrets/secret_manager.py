"""Layered implementation of ISecretProvider.

Sources are consulted in order:
    1. Environment variable (``:`` replaced by ``_``, upper-cased)
    2. Configured secrets (SecuritySettings.secrets)
    3. Secrets set at runtime
    4. Development defaults, when enabled
"""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping

from pydantic import SecretStr

from infrastructure.observability import DefaultSecretProbe, SecretProbe
from shared_kernel.secrets import SecretNotFoundError

DEVELOPMENT_DEFAULTS: dict[str, str] = {
    "Jwt:SecretKey": "development-jwt-secret-key-change-me-in-production",
    "MessageBus:RabbitMq:Password": "guest",
    "ExternalServices:EmailService:ApiKey": "dev-email-api-key",
}


def environment_variable_name(name: str) -> str:
    """Map a secret name such as ``Jwt:SecretKey`` to ``JWT_SECRETKEY``."""
    return name.replace(":", "_").upper()


class SecretManager:
    """Resolves secrets from the environment, configuration and defaults."""

    def __init__(
        self,
        configured: Mapping[str, SecretStr] | None = None,
        use_development_defaults: bool = False,
        environ: Mapping[str, str] | None = None,
        probe: SecretProbe | None = None,
    ):
        """Initialize the manager.

        Args:
            configured: Secrets from settings, keyed by secret name
            use_development_defaults: Fall back to built-in development values
            environ: Environment mapping, os.environ when None
            probe: Optional domain probe for observability
        """
        self._configured = dict(configured or {})
        self._use_development_defaults = use_development_defaults
        self._environ = environ if environ is not None else os.environ
        self._runtime: dict[str, str] = {}
        self._lock = threading.Lock()
        self._probe = probe or DefaultSecretProbe()

    async def get_secret(self, name: str) -> str:
        value = self._environ.get(environment_variable_name(name))
        if value:
            self._probe.secret_resolved(name, "environment")
            return value

        configured = self._configured.get(name)
        if configured is not None and configured.get_secret_value():
            self._probe.secret_resolved(name, "configuration")
            return configured.get_secret_value()

        with self._lock:
            runtime = self._runtime.get(name)
        if runtime is not None:
            self._probe.secret_resolved(name, "runtime")
            return runtime

        if self._use_development_defaults and name in DEVELOPMENT_DEFAULTS:
            self._probe.secret_resolved(name, "development_default")
            return DEVELOPMENT_DEFAULTS[name]

        self._probe.secret_not_found(name)
        raise SecretNotFoundError(name)

    async def set_secret(self, name: str, value: str) -> None:
        with self._lock:
            self._runtime[name] = value
        self._probe.secret_stored(name)

    async def has_secret(self, name: str) -> bool:
        try:
            await self.get_secret(name)
        except SecretNotFoundError:
            return False
        return True
