"""Shared plumbing for the Minecraft version sources.

``MinecraftSource`` owns the :class:`UpstreamClient` and the record adapter
every Minecraft source needs.  ``PerVersionBuildSource`` captures the
"list versions, then look up builds one version at a time" shape that Paper
and Purpur share, including the rule that one version's failed lookup only
drops that version.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, ClassVar

import httpx
from pydantic import TypeAdapter

from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.models.versions import (
    VersionRange,
    VersionRecord,
    VersionType,
    create_version_record,
)
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT, UpstreamClient
from versionproxy.utils.errors import VersionProxyError
from versionproxy.utils.logging import get_logger
from versionproxy.utils.versions import take_until_inclusive

_VERSION_RECORDS: TypeAdapter[list[VersionRecord]] = TypeAdapter(list[VersionRecord])


class MinecraftSource(IVersionSource[VersionRecord]):
    """Base class for sources that produce :class:`VersionRecord` lists."""

    source_name: ClassVar[str]
    record_adapter: ClassVar[TypeAdapter[Any]] = _VERSION_RECORDS

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._upstream = UpstreamClient(
            http_client, self.source_name, user_agent=user_agent
        )
        self._logger = get_logger(__name__)

    def get_source_name(self) -> str:
        return self.source_name


def channel_for(version_id: str) -> VersionType:
    """Paper and Purpur mark pre-releases by embedding "snapshot" in the id."""
    return VersionType.SNAPSHOT if "snapshot" in version_id else VersionType.RELEASE


class PerVersionBuildSource(MinecraftSource):
    """Template for sources with one build-list request per version.

    Requests run strictly one after another so a refresh never floods the
    upstream with a burst of parallel lookups.
    """

    @abstractmethod
    async def _list_versions(self) -> list[str]:
        """Return the version identifiers the upstream knows about."""

    @abstractmethod
    async def _fetch_build_range(self, version_id: str) -> VersionRange | None:
        """Return the first/last build for *version_id*, or ``None`` if it has none."""

    async def fetch_versions(self) -> list[VersionRecord]:
        version_ids = take_until_inclusive(await self._list_versions())

        records: list[VersionRecord] = []
        skipped = 0
        for version_id in version_ids:
            try:
                build_range = await self._fetch_build_range(version_id)
            except VersionProxyError as exc:
                skipped += 1
                self._logger.warning(
                    "build_lookup_failed",
                    source=self.source_name,
                    version=version_id,
                    error=str(exc),
                )
                continue

            if build_range is None:
                continue

            channel = channel_for(version_id)
            records.append(
                create_version_record(
                    version_id,
                    version_id,
                    channel,
                    channel is VersionType.RELEASE,
                    build_numbers=build_range,
                )
            )

        self._logger.info(
            "source_fetched",
            source=self.source_name,
            versions=len(records),
            skipped=skipped,
        )
        return records
