"""End-to-end refresh tests: real sources and orchestrator over a mocked HTTP client."""

from __future__ import annotations

import httpx
import pytest

from tests.conftest import RecordingReporter, make_http_client
from versionproxy.pipeline.orchestrator import CacheRefreshOrchestrator
from versionproxy.pipeline.scheduler import RefreshScheduler
from versionproxy.providers.cache.memory_cache import MemoryCacheProvider
from versionproxy.providers.docker.node_source import DockerNodeSource
from versionproxy.providers.minecraft import PaperSource, VanillaSource
from versionproxy.providers.minecraft.vanilla import MANIFEST_URL

PAPER = "https://api.papermc.io/v2/projects/paper"
DOCKER = "https://hub.docker.com/v2/repositories/library/node/tags?page_size=100"


@pytest.mark.asyncio
async def test_stale_cache_survives_upstream_outage() -> None:
    cache = MemoryCacheProvider()
    reporter = RecordingReporter()
    orchestrator = CacheRefreshOrchestrator(cache=cache, error_reporter=reporter)

    healthy = make_http_client({MANIFEST_URL: {"versions": [{"id": "1.21", "type": "release"}]}})
    first = await orchestrator.get_or_refresh(VanillaSource(healthy))
    assert [r.id for r in first] == ["1.21"]

    # refresh() skips the cache hit, so the outage is actually exercised
    outage = VanillaSource(make_http_client({MANIFEST_URL: httpx.Response(503)}))
    refreshed = await orchestrator.refresh(outage)

    assert [r.id for r in refreshed] == ["1.21"]
    assert len(reporter.captured) == 1


@pytest.mark.asyncio
async def test_scheduled_run_populates_every_cache_key(no_sleep) -> None:
    routes = {
        MANIFEST_URL: {"versions": [{"id": "1.20.4", "type": "release"}]},
        PAPER: {"versions": ["1.20.4"]},
        f"{PAPER}/versions/1.20.4/builds": {"builds": [{"build": 1}, {"build": 2}]},
        DOCKER: {"next": None, "results": [{"name": "20.11.1"}, {"name": "lts"}]},
    }
    http = make_http_client(routes)
    cache = MemoryCacheProvider()
    orchestrator = CacheRefreshOrchestrator(cache=cache, error_reporter=RecordingReporter())
    sources = [VanillaSource(http), PaperSource(http), DockerNodeSource(http, sleep=no_sleep)]

    summary = await RefreshScheduler(orchestrator, sources).refresh_all()

    assert summary == {"vanilla": 1, "paper": 1, "docker_node": 1}
    for key in ("minecraft:vanilla", "minecraft:paper", "docker:node"):
        assert await cache.exists(key)
    cached_paper = await cache.get("minecraft:paper")
    assert cached_paper[0]["buildNumbers"] == {"min": "1", "max": "2"}
