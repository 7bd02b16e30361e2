"""versionproxy FastAPI application entry point.

Wires together every version source, the cache backend, the refresh
orchestrator and scheduler, and the routes.  Loads configuration from
``.env`` and ``config/config.yaml`` and configures structured logging.

Run locally with ``python -m versionproxy.main`` or
``uvicorn versionproxy.main:app``.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from versionproxy.api.middleware import (
    BearerAuthMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from versionproxy.api.routes import health_router
from versionproxy.api.routes import router as api_router
from versionproxy.config.loader import load_config, upstream_options
from versionproxy.config.settings import Settings
from versionproxy.interfaces.cache_provider import ICacheProvider
from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.pipeline.orchestrator import CacheRefreshOrchestrator
from versionproxy.pipeline.scheduler import RefreshScheduler
from versionproxy.providers.cache.memory_cache import MemoryCacheProvider
from versionproxy.providers.cache.redis_cache import RedisCacheProvider
from versionproxy.providers.docker.node_source import REQUEST_TIMEOUT, DockerNodeSource
from versionproxy.providers.minecraft import (
    FabricSource,
    ForgeSource,
    NeoForgeSource,
    PaperSource,
    PurpurSource,
    QuiltSource,
    VanillaSource,
)
from versionproxy.providers.observability.log_reporter import LogErrorReporter
from versionproxy.utils.logging import configure_logging, get_logger

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=settings.is_production,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_cache(app_settings: Settings) -> ICacheProvider:
    if app_settings.redis_url:
        return RedisCacheProvider.from_url(app_settings.redis_url, ttl=app_settings.cache_ttl_seconds)
    return MemoryCacheProvider(ttl=app_settings.cache_ttl_seconds)


def _build_all(app_settings: Settings, app_config: dict) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    # Minecraft sources share one client; Docker Hub gets its own so its
    # 30 s timeout and connection pool do not affect the others.
    http_client = httpx.AsyncClient(timeout=15.0)
    registry_client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
    user_agent = app_settings.user_agent

    # -- Version sources, keyed by route name --
    minecraft_sources: dict[str, IVersionSource[Any]] = {
        "vanilla": VanillaSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "vanilla")
        ),
        "paper": PaperSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "paper")
        ),
        "purpur": PurpurSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "purpur")
        ),
        "fabric": FabricSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "fabric")
        ),
        "forge": ForgeSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "forge")
        ),
        "neoforge": NeoForgeSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "neoforge")
        ),
        "quilt": QuiltSource(
            http_client, user_agent=user_agent, **upstream_options(app_config, "quilt")
        ),
    }
    docker_sources: dict[str, IVersionSource[Any]] = {
        "node": DockerNodeSource(
            registry_client, user_agent=user_agent, **upstream_options(app_config, "docker_node")
        ),
    }

    # -- Cache + refresh pipeline --
    cache = _build_cache(app_settings)
    orchestrator = CacheRefreshOrchestrator(
        cache=cache,
        error_reporter=LogErrorReporter(),
        ttl=app_settings.cache_ttl_seconds,
    )
    scheduler = RefreshScheduler(
        orchestrator,
        [*minecraft_sources.values(), *docker_sources.values()],
        hour_utc=app_settings.refresh_hour_utc,
    )

    return {
        "http_clients": [http_client, registry_client],
        "cache": cache,
        "orchestrator": orchestrator,
        "scheduler": scheduler,
        "minecraft_sources": minecraft_sources,
        "docker_sources": docker_sources,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings, app_config: dict):  # noqa: ANN202
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Build components on startup, stop the scheduler and close clients on shutdown."""
        components = _build_all(app_settings, app_config)

        for key, value in components.items():
            setattr(application.state, key, value)

        scheduler: RefreshScheduler = components["scheduler"]
        scheduler.start(run_immediately=app_settings.refresh_on_startup)

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            cache=components["cache"].get_provider_name(),
            auth=app_settings.auth_enabled,
            refresh_hour_utc=app_settings.refresh_hour_utc,
        )

        yield

        # -- Shutdown --
        await scheduler.stop()
        cache = components["cache"]
        if isinstance(cache, RedisCacheProvider):
            await cache.close()
        await asyncio.gather(*(client.aclose() for client in components["http_clients"]))
        _logger.info("app_shutdown", message="HTTP clients closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None, app_config: dict | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings
    if app_config is None:
        app_config = config

    application = FastAPI(
        title="versionproxy API",
        version=__version__,
        description=(
            "Cached, normalized version listings for Minecraft server "
            "distributions and official Docker images."
        ),
        lifespan=_make_lifespan(app_settings, app_config),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(BearerAuthMiddleware, token=app_settings.auth_token)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    # -- Routes --
    application.include_router(api_router)
    application.include_router(health_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Serve :data:`app` with uvicorn using the module-level settings."""
    uvicorn.run(
        "versionproxy.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()
