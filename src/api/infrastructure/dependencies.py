"""Shared infrastructure dependencies.

Provides ONLY process-wide infrastructure resources (cache, message bus,
secrets, email, pipeline behaviors). Does NOT import from bounded contexts
to maintain DDD boundaries.
"""

from datetime import timedelta
from functools import lru_cache

from infrastructure.caching import MemoryCacheService
from infrastructure.email import EmailService
from infrastructure.messaging import InMemoryMessageBus
from infrastructure.secrets import SecretManager
from infrastructure.settings import (
    get_application_settings,
    get_cache_settings,
    get_feature_settings,
    get_resiliency_settings,
    get_security_settings,
)
from shared_kernel.mediator import Mediator
from shared_kernel.mediator.behaviors import (
    CachingBehavior,
    LoggingBehavior,
    ResiliencyBehavior,
)


@lru_cache
def get_cache_service() -> MemoryCacheService:
    """Get application-scoped cache (singleton)."""
    settings = get_cache_settings()
    return MemoryCacheService(
        max_size=settings.max_entries,
        default_ttl=timedelta(minutes=settings.default_ttl_minutes),
    )


@lru_cache
def get_message_bus() -> InMemoryMessageBus:
    """Get application-scoped message bus (singleton)."""
    return InMemoryMessageBus()


@lru_cache
def get_secret_manager() -> SecretManager:
    """Get application-scoped secret manager (singleton).

    Development defaults are only served in the development environment.
    """
    return SecretManager(
        configured=get_security_settings().secrets,
        use_development_defaults=get_application_settings().is_development,
    )


@lru_cache
def get_email_service() -> EmailService:
    """Get application-scoped email sender (singleton)."""
    return EmailService()


def create_mediator(
    expected_errors: tuple[type[Exception], ...] = (),
) -> Mediator:
    """Build a mediator whose shared behaviors follow the current settings.

    Caching is left out entirely when the caching feature is off. Request
    handlers are registered by the bounded contexts.

    Args:
        expected_errors: Business errors logged as warnings rather than errors
    """
    cache_settings = get_cache_settings()
    resiliency_settings = get_resiliency_settings()

    caching = None
    if get_feature_settings().enable_caching:
        caching = CachingBehavior(
            cache=get_cache_service(),
            ttl=timedelta(minutes=cache_settings.default_ttl_minutes),
            key_prefix=cache_settings.key_prefix,
        )

    return Mediator(
        logging_behavior=LoggingBehavior(expected_errors=expected_errors),
        caching_behavior=caching,
        resiliency_behavior=ResiliencyBehavior(
            max_attempts=resiliency_settings.max_attempts,
            backoff_multiplier=resiliency_settings.backoff_multiplier,
            backoff_min_seconds=resiliency_settings.backoff_min_seconds,
            backoff_max_seconds=resiliency_settings.backoff_max_seconds,
        ),
    )
