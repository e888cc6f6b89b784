"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse

from infrastructure.dependencies import (
    get_cache_service,
    get_email_service,
    get_message_bus,
)
from infrastructure.health import (
    HealthCheckService,
    HealthStatus,
    cache_check,
    memory_check,
    repository_check,
    self_check,
)
from infrastructure.logging import configure_logging
from infrastructure.middleware import SecurityHeadersMiddleware
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_application_settings, get_feature_settings
from infrastructure.version import __version__
from users.application.event_handlers import subscribe_event_handlers
from users.dependencies import get_mediator, get_user_repository
from users.presentation import routes as user_routes
from users.presentation.v2 import routes as user_routes_v2
from util import config_routes


@asynccontextmanager
async def bwadl_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Mediator registry (built once, before the first request)
    - Domain event subscribers
    - Draining outstanding event deliveries on shutdown
    """
    settings = get_application_settings()
    features = get_feature_settings()
    configure_logging(
        settings.log_level, log_format=settings.log_format, service=settings.name
    )
    probe = DefaultStartupProbe()

    get_mediator()

    bus = get_message_bus()
    if features.enable_event_driven_architecture:
        await subscribe_event_handlers(
            bus,
            get_email_service(),
            email_notifications_enabled=features.enable_email_notifications,
        )
        probe.event_handlers_subscribed(features.enable_email_notifications)
    else:
        probe.event_handlers_disabled()

    probe.application_started(settings.name, __version__, settings.environment)

    yield

    probe.application_stopping()
    await bus.drain()


app = FastAPI(
    title="Bwadl API",
    description="Users API with a command/query mediator pipeline",
    version=__version__,
    lifespan=bwadl_lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)

app.include_router(user_routes.router, prefix="/api/v1")
app.include_router(user_routes.router, prefix="/api")
app.include_router(user_routes_v2.router, prefix="/api/v2")
app.include_router(config_routes.router)


@lru_cache
def get_health_check_service() -> HealthCheckService:
    """Get the health checks of the running process (singleton)."""
    return HealthCheckService(
        {
            "self": self_check,
            "repository": repository_check(get_user_repository().count),
            "cache": cache_check(get_cache_service().stats),
            "memory": memory_check(),
        }
    )


def _status_code(report_status: HealthStatus) -> int:
    if report_status == HealthStatus.UNHEALTHY:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_200_OK


@app.get("/health")
async def health(
    service: Annotated[HealthCheckService, Depends(get_health_check_service)],
) -> JSONResponse:
    """Basic health check endpoint."""
    report = await service.run()
    return JSONResponse(
        status_code=_status_code(report.status),
        content={"status": report.status.value},
    )


@app.get("/health/detailed")
async def health_detailed(
    service: Annotated[HealthCheckService, Depends(get_health_check_service)],
) -> JSONResponse:
    """Per-check health report."""
    report = await service.run()
    content: dict[str, Any] = {
        "status": report.status.value,
        "total_duration_ms": round(report.total_duration_ms, 3),
        "checks": [
            {
                "name": entry.name,
                "status": entry.status.value,
                "description": entry.description,
                "duration_ms": round(entry.duration_ms, 3),
                "data": entry.data,
            }
            for entry in report.entries
        ],
    }
    return JSONResponse(status_code=_status_code(report.status), content=content)
