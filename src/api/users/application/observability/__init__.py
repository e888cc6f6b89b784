"""Domain-Oriented Observability for the users application layer."""

from users.application.observability.user_handler_probe import (
    DefaultUserHandlerProbe,
    UserHandlerProbe,
)

__all__ = [
    "DefaultUserHandlerProbe",
    "UserHandlerProbe",
]
