"""Abstract base class for upstream version sources.

Each concrete source (Mojang, Paper, Purpur, Fabric, Quilt, Forge, NeoForge,
Docker Hub) knows how to query its upstream and normalize the answer.  The
refresh orchestrator treats them all alike through this contract:

    source.cache_key        -> where the normalized list is cached
    await source.fetch()    -> FetchSuccess(records) | FetchFailure(error)
    source.dump(records)    -> JSON-ready payload for the cache
    source.load(payload)    -> records rebuilt from a cached payload

Subclasses implement :meth:`fetch_versions` and are free to raise from it;
:meth:`fetch` converts any exception into a :class:`FetchFailure`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import TypeAdapter

from versionproxy.models.results import FetchFailure, FetchResult, FetchSuccess

_T = TypeVar("_T")


class IVersionSource(ABC, Generic[_T]):
    """Contract for a single upstream version listing."""

    cache_key: ClassVar[str]
    record_adapter: ClassVar[TypeAdapter[Any]]

    @abstractmethod
    def get_source_name(self) -> str:
        """Short identifier used in logs and routes (e.g. ``"paper"``)."""

    @abstractmethod
    async def fetch_versions(self) -> list[_T]:
        """Query the upstream and return normalized records.

        Raises
        ------
        UpstreamFetchError
            On transport failure or a non-2xx response.
        UpstreamSchemaError
            When a response does not match the expected schema.
        """

    async def fetch(self) -> FetchResult[_T]:
        """Run :meth:`fetch_versions`, reporting the outcome as a value."""
        try:
            records = await self.fetch_versions()
        except Exception as exc:  # noqa: BLE001 -- every failure becomes a FetchFailure
            return FetchFailure(error=exc, source=self.get_source_name())
        return FetchSuccess(records=records)

    def dump(self, records: list[_T]) -> list[dict[str, Any]]:
        return self.record_adapter.dump_python(
            records, mode="json", by_alias=True, exclude_none=True
        )

    def load(self, payload: Any) -> list[_T]:
        return self.record_adapter.validate_python(payload)
