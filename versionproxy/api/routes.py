"""FastAPI routes for the version endpoints.

Endpoint                              Method  Description
-------------------------------------------------------------------------
/api/v1/minecraft/{source}            GET     VersionRecord list for one distribution
/api/v1/docker/node                   GET     Ascending NodeVersion list
/api/v1/endpoints                     GET     Map of the endpoints above
/health                               GET     Liveness probe

Every version endpoint goes through
:meth:`CacheRefreshOrchestrator.get_or_refresh`, so a request is served from
cache when possible, triggers a refresh on a miss, and at worst answers
``[]`` with 200 when the upstream is down and nothing is cached.

Sources and the orchestrator are resolved from ``app.state`` (populated in
``main._build_all``) through ``Annotated[..., Depends(helper)]`` aliases.
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from versionproxy.api.schemas import EndpointsResponse, HealthResponse
from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.pipeline.orchestrator import CacheRefreshOrchestrator
from versionproxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

API_PREFIX = "/api/v1"

router = APIRouter(prefix=API_PREFIX)
health_router = APIRouter()


# ---------------------------------------------------------------------------
# Dependency injection helpers -- resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_orchestrator(request: Request) -> CacheRefreshOrchestrator:
    return request.app.state.orchestrator


def _get_minecraft_sources(request: Request) -> dict[str, IVersionSource[Any]]:
    return request.app.state.minecraft_sources


def _get_docker_sources(request: Request) -> dict[str, IVersionSource[Any]]:
    return request.app.state.docker_sources


OrchestratorDep = Annotated[CacheRefreshOrchestrator, Depends(_get_orchestrator)]
MinecraftSourcesDep = Annotated[dict[str, IVersionSource[Any]], Depends(_get_minecraft_sources)]
DockerSourcesDep = Annotated[dict[str, IVersionSource[Any]], Depends(_get_docker_sources)]


async def _serve(orchestrator: CacheRefreshOrchestrator, source: IVersionSource[Any]) -> list[dict[str, Any]]:
    records = await orchestrator.get_or_refresh(source)
    return source.dump(records)


# ---------------------------------------------------------------------------
# Version endpoints
# ---------------------------------------------------------------------------


@router.get("/minecraft/{source_name}")
async def get_minecraft_versions(
    source_name: str,
    orchestrator: OrchestratorDep,
    sources: MinecraftSourcesDep,
) -> list[dict[str, Any]]:
    """Normalized versions for one Minecraft server distribution."""
    source = sources.get(source_name)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Unknown Minecraft source '{source_name}'")
    return await _serve(orchestrator, source)


@router.get("/docker/{image}")
async def get_docker_versions(
    image: str,
    orchestrator: OrchestratorDep,
    sources: DockerSourcesDep,
) -> list[dict[str, Any]]:
    """Versions published as tags of an official Docker image."""
    source = sources.get(image)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Unknown Docker image '{image}'")
    return await _serve(orchestrator, source)


@router.get("/endpoints", response_model=EndpointsResponse)
async def list_endpoints(
    minecraft: MinecraftSourcesDep,
    docker: DockerSourcesDep,
) -> EndpointsResponse:
    return EndpointsResponse(
        minecraft={name: f"{API_PREFIX}/minecraft/{name}" for name in minecraft},
        docker={name: f"{API_PREFIX}/docker/{name}" for name in docker},
    )


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@health_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
