"""Daily background refresh of every version source.

The scheduler is a single asyncio task started from the application
lifespan.  Once a day, at ``hour_utc:00`` UTC, it calls
:meth:`CacheRefreshOrchestrator.get_or_refresh` for every registered source
concurrently, the same path the HTTP handlers use, so expired entries are
repopulated ahead of user requests.  A failure in one source is contained
by the orchestrator and never stops the others.  An unexpected exception in
a run is logged and the loop carries on.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.pipeline.orchestrator import CacheRefreshOrchestrator
from versionproxy.utils.errors import ConfigurationError
from versionproxy.utils.logging import get_logger


def seconds_until_next_run(now: datetime, hour_utc: int) -> float:
    """Seconds from *now* until the next ``hour_utc:00:00`` UTC.

    A run scheduled for exactly *now* is pushed to the following day.
    """
    now_utc = now.astimezone(timezone.utc)
    target = now_utc.replace(hour=hour_utc, minute=0, second=0, microsecond=0)
    if target <= now_utc:
        target += timedelta(days=1)
    return (target - now_utc).total_seconds()


class RefreshScheduler:
    """Runs :meth:`refresh_all` once a day at a fixed UTC hour."""

    def __init__(
        self,
        orchestrator: CacheRefreshOrchestrator,
        sources: Sequence[IVersionSource[Any]],
        hour_utc: int = 0,
        clock: Callable[[], datetime] = lambda: datetime.now(tz=timezone.utc),
    ) -> None:
        if not 0 <= hour_utc <= 23:
            raise ConfigurationError(f"refresh hour must be within 0-23, got {hour_utc}")
        self._orchestrator = orchestrator
        self._sources = list(sources)
        self._hour_utc = hour_utc
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._logger = get_logger(__name__)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_all(self) -> dict[str, int]:
        """Refresh every source concurrently; return record counts by source."""
        started = self._clock()
        counts = await asyncio.gather(
            *(self._orchestrator.get_or_refresh(source) for source in self._sources)
        )
        summary = {
            source.get_source_name(): len(records)
            for source, records in zip(self._sources, counts)
        }
        elapsed = (self._clock() - started).total_seconds()
        self._logger.info("scheduled_refresh_complete", sources=summary, elapsed_s=round(elapsed, 2))
        return summary

    def start(self, *, run_immediately: bool = False) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(run_immediately), name="refresh-scheduler")
        self._logger.info("scheduler_started", hour_utc=self._hour_utc, sources=len(self._sources))

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        self._logger.info("scheduler_stopped")

    async def _run(self, run_immediately: bool) -> None:
        if run_immediately:
            await self._run_once()
        while True:
            delay = seconds_until_next_run(self._clock(), self._hour_utc)
            self._logger.debug("scheduler_sleeping", seconds=round(delay))
            await asyncio.sleep(delay)
            await self._run_once()

    async def _run_once(self) -> None:
        try:
            await self.refresh_all()
        except Exception as exc:  # noqa: BLE001
            self._logger.error("scheduled_refresh_failed", error=str(exc), exc_info=exc)
