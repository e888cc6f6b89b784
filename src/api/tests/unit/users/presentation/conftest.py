"""Shared fixtures for the users HTTP route tests."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.caching import MemoryCacheService
from infrastructure.messaging import InMemoryMessageBus
from shared_kernel.mediator import Mediator
from shared_kernel.mediator.behaviors import (
    CachingBehavior,
    LoggingBehavior,
    ResiliencyBehavior,
)
from users.application import register_user_handlers
from users.infrastructure import InMemoryUserRepository
from users.ports.exceptions import DuplicateEmailError, UserNotFoundError


@pytest.fixture
def mediator() -> Mediator:
    """Mediator wired to a fresh repository and cache."""
    mediator = Mediator(
        logging_behavior=LoggingBehavior(
            expected_errors=(UserNotFoundError, DuplicateEmailError)
        ),
        caching_behavior=CachingBehavior(
            cache=MemoryCacheService(), ttl=timedelta(minutes=15)
        ),
        resiliency_behavior=ResiliencyBehavior(max_attempts=3, backoff_multiplier=0),
    )
    register_user_handlers(
        mediator,
        user_repository=InMemoryUserRepository(),
        message_bus=InMemoryMessageBus(),
    )
    return mediator


def build_client(mediator: Mediator) -> TestClient:
    """Create a TestClient exposing every users router over the given mediator."""
    from users.dependencies import get_mediator
    from users.presentation.routes import router
    from users.presentation.v2.routes import router as v2_router

    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.include_router(router, prefix="/api")
    app.include_router(v2_router, prefix="/api/v2")
    app.dependency_overrides[get_mediator] = lambda: mediator
    return TestClient(app)


@pytest.fixture
def client_factory():
    """Factory building a TestClient around any mediator, real or mocked."""
    return build_client


@pytest.fixture
def test_client(mediator: Mediator) -> TestClient:
    return build_client(mediator)


@pytest.fixture
def john_payload() -> dict[str, str]:
    return {"name": "John Doe", "email": "john@example.com", "type": "employee"}
