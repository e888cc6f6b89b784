"""Secret provider adapters."""

from infrastructure.secrets.secret_manager import (
    DEVELOPMENT_DEFAULTS,
    SecretManager,
    environment_variable_name,
)

__all__ = ["DEVELOPMENT_DEFAULTS", "SecretManager", "environment_variable_name"]
