"""Security headers added to every HTTP response."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

STRICT_CSP = "default-src 'self'; frame-ancestors 'none'"

# Swagger UI and ReDoc load scripts and styles from a CDN
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https://fastapi.tiangolo.com; "
    "frame-ancestors 'none'"
)

DOCS_PATH_PREFIXES = ("/docs", "/redoc", "/openapi.json")


def content_security_policy(path: str) -> str:
    """Pick the CSP for a request path."""
    if path.startswith(DOCS_PATH_PREFIXES):
        return DOCS_CSP
    return STRICT_CSP


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds OWASP recommended security headers to all responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = content_security_policy(
            request.url.path
        )
        return response
