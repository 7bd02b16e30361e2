"""Pydantic response schemas for the small non-version endpoints.

Version listings are returned as the dumped record lists themselves
(``VersionRecord`` / ``NodeVersion`` in their camelCase wire form), so only
health, endpoint discovery and error bodies need their own schema here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness probe body.  Always ``{"status": "ok"}`` while the process serves."""

    status: str = "ok"


class EndpointsResponse(BaseModel):
    """Map of every version endpoint, grouped by ecosystem."""

    minecraft: dict[str, str] = Field(default_factory=dict)
    docker: dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error body returned by the auth and error-handling middleware."""

    error: str
    detail: str | None = None
