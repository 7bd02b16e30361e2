"""versionproxy API layer -- routes, schemas, and middleware."""

from versionproxy.api.middleware import (
    BearerAuthMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from versionproxy.api.routes import health_router, router
from versionproxy.api.schemas import EndpointsResponse, ErrorResponse, HealthResponse

__all__ = [
    "BearerAuthMiddleware",
    "EndpointsResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "health_router",
    "router",
]
