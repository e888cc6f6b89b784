"""Configuration inspection routes.

Read-only views of the effective settings. Secret values are never
returned; the JWT signing key is always reported as redacted.
"""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from infrastructure.dependencies import get_secret_manager
from infrastructure.secrets import SecretManager
from infrastructure.settings import (
    ApplicationSettings,
    CacheSettings,
    FeatureSettings,
    MessageBusSettings,
    SecuritySettings,
    get_application_settings,
    get_cache_settings,
    get_feature_settings,
    get_message_bus_settings,
    get_security_settings,
)
from infrastructure.version import __version__

logger = structlog.get_logger()

router = APIRouter(prefix="/api/configuration", tags=["configuration"])

REDACTED = "[REDACTED]"
JWT_SECRET_NAME = "Jwt:SecretKey"


@router.get("/application")
def get_application_configuration(
    settings: Annotated[ApplicationSettings, Depends(get_application_settings)],
) -> dict[str, Any]:
    """Application name, version and environment."""
    return {
        "name": settings.name,
        "version": __version__,
        "environment": settings.environment,
        "debug": settings.debug,
        "log_level": settings.log_level,
        "log_format": settings.log_format,
    }


@router.get("/features")
def get_feature_configuration(
    settings: Annotated[FeatureSettings, Depends(get_feature_settings)],
) -> dict[str, Any]:
    """Current feature flags."""
    return settings.model_dump()


@router.get("/cache")
def get_cache_configuration(
    settings: Annotated[CacheSettings, Depends(get_cache_settings)],
) -> dict[str, Any]:
    """Cache provider and entry limits."""
    return settings.model_dump()


@router.get("/message-bus")
def get_message_bus_configuration(
    settings: Annotated[MessageBusSettings, Depends(get_message_bus_settings)],
) -> dict[str, Any]:
    """Message bus provider and broker addressing."""
    return settings.model_dump()


@router.get("/security")
async def get_security_configuration(
    settings: Annotated[SecuritySettings, Depends(get_security_settings)],
    secrets: Annotated[SecretManager, Depends(get_secret_manager)],
) -> dict[str, Any]:
    """JWT parameters with the signing key redacted."""
    try:
        secret_configured = await secrets.has_secret(JWT_SECRET_NAME)
    except Exception as e:
        logger.error("security_configuration_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e

    return {
        "jwt": {
            "issuer": settings.jwt_issuer,
            "audience": settings.jwt_audience,
            "expiry_minutes": settings.jwt_expiry_minutes,
            "secret_key": REDACTED,
            "secret_key_configured": secret_configured,
        },
        "require_api_key": settings.require_api_key,
        "configured_secrets": sorted(settings.secrets),
    }
