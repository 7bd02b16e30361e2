"""Shared pytest fixtures for the versionproxy test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import TypeAdapter

from versionproxy.interfaces.error_reporter import IErrorReporter
from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.models.versions import NodeVersion
from versionproxy.providers.cache.memory_cache import MemoryCacheProvider

# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    """Build a real ``httpx.Response`` carrying *payload* as JSON."""
    return httpx.Response(status_code, json=payload)


def make_http_client(
    routes: dict[str, Any] | None = None,
    handler: Callable[[str], httpx.Response] | None = None,
) -> MagicMock:
    """Return a mock ``httpx.AsyncClient`` whose ``get`` answers from *routes*.

    Route values may be an ``httpx.Response``, an exception instance (raised),
    a list of those (consumed one per call, the last one repeats), or any
    other value (served as a 200 JSON body).  Unknown URLs answer 404.
    *handler* overrides routing entirely.
    """
    routes = dict(routes or {})

    async def _get(url: str, **kwargs: Any) -> httpx.Response:
        if handler is not None:
            return handler(url)
        if url not in routes:
            return httpx.Response(404, json={"error": "not found"})
        answer = routes[url]
        if isinstance(answer, list) and answer and isinstance(answer[0], (httpx.Response, Exception)):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return json_response(answer)

    client = MagicMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=_get)
    return client


# ---------------------------------------------------------------------------
# Fakes for the pipeline collaborators
# ---------------------------------------------------------------------------


class FakeNodeSource(IVersionSource[NodeVersion]):
    """Version source that returns canned records or raises on demand."""

    cache_key = "docker:node"
    record_adapter: ClassVar[TypeAdapter[Any]] = TypeAdapter(list[NodeVersion])

    def __init__(
        self,
        records: list[NodeVersion] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.records = records or []
        self.error = error
        self.calls = 0

    def get_source_name(self) -> str:
        return "fake_node"

    async def fetch_versions(self) -> list[NodeVersion]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class RecordingReporter(IErrorReporter):
    """Error reporter that keeps every captured exception for assertions."""

    def __init__(self) -> None:
        self.captured: list[tuple[BaseException, dict[str, Any]]] = []

    def capture_exception(self, error: BaseException, **context: Any) -> None:
        self.captured.append((error, context))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_cache() -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=16, ttl=86400)


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def node_versions() -> list[NodeVersion]:
    return [
        NodeVersion(major=18, minor=0, patch=0),
        NodeVersion(major=20, minor=11, patch=1),
    ]


@pytest.fixture()
def no_sleep() -> AsyncMock:
    """Drop-in for ``asyncio.sleep`` that records delays without waiting."""
    return AsyncMock(return_value=None)
