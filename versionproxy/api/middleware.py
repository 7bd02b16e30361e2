"""API middleware -- request logging, bearer auth, security headers, errors.

Starlette middleware is a stack (last added, first executed).  In
``main.create_app`` the order is::

    app.add_middleware(ErrorHandlingMiddleware)    # innermost
    app.add_middleware(BearerAuthMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)   # outermost

so every response, including a 401 from the auth check, gets the security
headers and a request log line with its final status.
"""

from __future__ import annotations

import secrets
import time

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from versionproxy.api.schemas import ErrorResponse
from versionproxy.utils.errors import VersionProxyError
from versionproxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Require ``Authorization: Bearer <token>`` on every request.

    An empty *token* disables the check entirely.
    """

    def __init__(self, app: ASGIApp, token: str = "") -> None:
        super().__init__(app)
        self._expected = f"Bearer {token}" if token else ""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if not self._expected:
            return await call_next(request)

        supplied = request.headers.get("Authorization", "")
        if not secrets.compare_digest(supplied.encode(), self._expected.encode()):
            _logger.warning("auth_rejected", path=str(request.url.path), has_header=bool(supplied))
            body = ErrorResponse(error="Unauthorized")
            return JSONResponse(status_code=401, content=body.model_dump(exclude_none=True))

        return await call_next(request)


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add conservative security headers to every response."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``VersionProxyError`` subclasses and return structured JSON errors.

    The refresh orchestrator never raises, so reaching this handler means a
    bug in wiring rather than an upstream outage.  Details stay in the log;
    the client only sees the error type and message.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except VersionProxyError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(
                error=type(exc).__name__,
                detail=exc.message,
            )
            return JSONResponse(
                status_code=500,
                content=body.model_dump(),
            )
