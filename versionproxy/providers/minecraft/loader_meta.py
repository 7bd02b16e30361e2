"""Fabric and Quilt game versions from their "meta" services.

Both services expose the same two listings under different base URLs:

    {base}/versions/loader  -> loader releases, newest first
    {base}/versions/game    -> game versions with a ``stable`` flag

Every stable game version gets the same loader range, spanning the oldest
(last) to the newest (first) loader release.
"""

from __future__ import annotations

import httpx

from versionproxy.models.upstream import GameVersionList, LoaderVersionList
from versionproxy.models.versions import (
    VersionRange,
    VersionRecord,
    VersionType,
    create_version_record,
)
from versionproxy.providers.minecraft.base import MinecraftSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT
from versionproxy.utils.errors import UpstreamSchemaError
from versionproxy.utils.versions import take_until_inclusive

FABRIC_META_URL = "https://meta.fabricmc.net/v2"
QUILT_META_URL = "https://meta.quiltmc.org/v3"


class LoaderMetaSource(MinecraftSource):
    """Loader-oriented source backed by a Fabric-style meta API."""

    default_meta_url: str

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        meta_url: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(http_client, user_agent=user_agent)
        self._meta_url = (meta_url or self.default_meta_url).rstrip("/")

    async def fetch_versions(self) -> list[VersionRecord]:
        loaders = (
            await self._upstream.get_json(f"{self._meta_url}/versions/loader", LoaderVersionList)
        ).root
        games = (
            await self._upstream.get_json(f"{self._meta_url}/versions/game", GameVersionList)
        ).root

        if not loaders:
            raise UpstreamSchemaError(
                "Loader listing is empty", provider_name=self.source_name
            )
        loader_range = VersionRange(min=loaders[-1].version, max=loaders[0].version)

        stable_ids = [game.version for game in games if game.stable]
        records = [
            create_version_record(
                version_id,
                version_id,
                VersionType.RELEASE,
                True,
                loader_versions=loader_range,
            )
            for version_id in take_until_inclusive(stable_ids)
        ]

        self._logger.info(
            "source_fetched",
            source=self.source_name,
            versions=len(records),
            loader_min=loader_range.min,
            loader_max=loader_range.max,
        )
        return records


class FabricSource(LoaderMetaSource):
    source_name = "fabric"
    cache_key = "minecraft:fabric"
    default_meta_url = FABRIC_META_URL


class QuiltSource(LoaderMetaSource):
    source_name = "quilt"
    cache_key = "minecraft:quilt"
    default_meta_url = QUILT_META_URL
