"""Unit tests for the security headers middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.middleware import SecurityHeadersMiddleware
from infrastructure.middleware.security_headers import (
    DOCS_CSP,
    STRICT_CSP,
    content_security_policy,
)


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)

    @app.get("/ping")
    def ping():
        return {"pong": True}

    return TestClient(app)


class TestSecurityHeadersMiddleware:
    def test_adds_headers_to_every_response(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert response.headers["Content-Security-Policy"] == STRICT_CSP

    def test_adds_headers_to_error_responses(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_docs_get_relaxed_policy(self, client):
        response = client.get("/docs")

        assert response.headers["Content-Security-Policy"] == DOCS_CSP


class TestContentSecurityPolicy:
    @pytest.mark.parametrize("path", ["/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"])
    def test_docs_paths(self, path):
        assert content_security_policy(path) == DOCS_CSP

    @pytest.mark.parametrize("path", ["/", "/api/users", "/health"])
    def test_api_paths(self, path):
        assert content_security_policy(path) == STRICT_CSP
