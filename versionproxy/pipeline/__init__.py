"""Refresh pipeline: the cache orchestrator and the daily scheduler."""

from versionproxy.pipeline.orchestrator import CACHE_TTL_SECONDS, CacheRefreshOrchestrator
from versionproxy.pipeline.scheduler import RefreshScheduler, seconds_until_next_run

__all__ = [
    "CACHE_TTL_SECONDS",
    "CacheRefreshOrchestrator",
    "RefreshScheduler",
    "seconds_until_next_run",
]
