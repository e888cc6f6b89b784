"""Unit test fixtures."""

import pytest

from infrastructure import dependencies as infrastructure_dependencies
from infrastructure import settings as infrastructure_settings
from users import dependencies as users_dependencies

_SINGLETONS = (
    infrastructure_settings.get_application_settings,
    infrastructure_settings.get_cache_settings,
    infrastructure_settings.get_resiliency_settings,
    infrastructure_settings.get_feature_settings,
    infrastructure_settings.get_message_bus_settings,
    infrastructure_settings.get_security_settings,
    infrastructure_dependencies.get_cache_service,
    infrastructure_dependencies.get_message_bus,
    infrastructure_dependencies.get_secret_manager,
    infrastructure_dependencies.get_email_service,
    users_dependencies.get_user_repository,
    users_dependencies.get_mediator,
)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test fresh settings, adapters and mediator."""
    for getter in _SINGLETONS:
        getter.cache_clear()
    yield
    for getter in _SINGLETONS:
        getter.cache_clear()
