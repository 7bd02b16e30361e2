"""Cache-refresh orchestrator: the single place that decides fallback policy.

``get_or_refresh(source)`` follows one fixed sequence:

    1. Read ``source.cache_key``.  A hit is returned with no upstream call.
    2. On a miss, ``await source.fetch()``.
         FetchFailure             -> report, then fall back (step 3)
         FetchSuccess, empty      -> return ``[]`` without caching it
         FetchSuccess, non-empty  -> cache with TTL, return the records
    3. Fallback: re-read the cache best-effort and return whatever is there
       (possibly stale), else ``[]``.

Nothing here raises to the caller.  A broken cache read is reported and
handled like a failed fetch; a broken cache write after a good fetch is
reported and the fresh records are still returned.  Cached payloads that no
longer validate against the source's record type are reported and handled
like a miss, so a successful fetch overwrites them.

There is no single-flight: concurrent misses on the same key each hit the
upstream and the last writer wins.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError

from versionproxy.interfaces.cache_provider import ICacheProvider
from versionproxy.interfaces.error_reporter import IErrorReporter
from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.models.results import FetchFailure, FetchSuccess
from versionproxy.utils.errors import CacheError
from versionproxy.utils.logging import get_logger

_T = TypeVar("_T")

CACHE_TTL_SECONDS = 86400

_MISSING = object()


class CacheRefreshOrchestrator:
    """Serve version lists from cache, refreshing from upstream on a miss."""

    def __init__(
        self,
        cache: ICacheProvider,
        error_reporter: IErrorReporter,
        ttl: int = CACHE_TTL_SECONDS,
    ) -> None:
        self._cache = cache
        self._error_reporter = error_reporter
        self._ttl = ttl
        self._logger = get_logger(__name__)

    @property
    def ttl(self) -> int:
        return self._ttl

    async def get_or_refresh(self, source: IVersionSource[_T]) -> list[_T]:
        """Return the cached records for *source*, fetching them on a miss."""
        key = source.cache_key

        try:
            cached = await self._read(source)
        except CacheError as exc:
            self._report(exc, source, stage="cache_read")
            return await self._fallback(source)
        except ValidationError as exc:
            # A payload written under an older record shape; refetch to replace it.
            self._report(exc, source, stage="cache_decode")
            return await self.refresh(source)

        if cached is not _MISSING:
            self._logger.debug("cache_hit", key=key)
            return cached  # type: ignore[return-value]

        self._logger.info("cache_miss", key=key, source=source.get_source_name())
        return await self.refresh(source)

    async def refresh(self, source: IVersionSource[_T]) -> list[_T]:
        """Fetch *source* unconditionally and commit a non-empty result."""
        result = await source.fetch()

        if isinstance(result, FetchFailure):
            self._report(result.error, source, stage="fetch")
            return await self._fallback(source)

        if not isinstance(result, FetchSuccess):  # pragma: no cover
            raise TypeError(f"Unexpected fetch result: {result!r}")

        if not result.records:
            self._logger.warning("source_returned_empty", source=source.get_source_name())
            return []

        await self._write(source, result.records)
        return result.records

    async def _read(self, source: IVersionSource[_T]) -> Any:
        payload = await self._cache.get(source.cache_key)
        if payload is None:
            return _MISSING
        return source.load(payload)

    async def _write(self, source: IVersionSource[_T], records: list[_T]) -> None:
        try:
            await self._cache.set(source.cache_key, source.dump(records), ttl=self._ttl)
        except CacheError as exc:
            self._report(exc, source, stage="cache_write")
            return
        self._logger.info(
            "source_refreshed",
            source=source.get_source_name(),
            key=source.cache_key,
            count=len(records),
            ttl=self._ttl,
        )

    async def _fallback(self, source: IVersionSource[_T]) -> list[_T]:
        try:
            stale = await self._read(source)
        except (CacheError, ValidationError) as exc:
            self._logger.warning(
                "fallback_read_failed", key=source.cache_key, error=str(exc)
            )
            return []

        if stale is _MISSING:
            self._logger.warning("fallback_empty", key=source.cache_key)
            return []

        self._logger.info("fallback_served", key=source.cache_key, count=len(stale))
        return stale  # type: ignore[no-any-return]

    def _report(self, error: BaseException, source: IVersionSource[Any], *, stage: str) -> None:
        self._error_reporter.capture_exception(
            error,
            source=source.get_source_name(),
            cache_key=source.cache_key,
            stage=stage,
        )
