"""Vanilla Minecraft releases from Mojang's launcher version manifest."""

from __future__ import annotations

import httpx

from versionproxy.models.upstream import MojangVersionManifest
from versionproxy.models.versions import VersionRecord, VersionType, create_version_record
from versionproxy.providers.minecraft.base import MinecraftSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT
from versionproxy.utils.versions import take_until_inclusive

MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"


class VanillaSource(MinecraftSource):
    """Release versions from the Mojang manifest, newest first.

    Snapshots, betas and alphas are dropped; the list ends at 1.7.10.
    """

    source_name = "vanilla"
    cache_key = "minecraft:vanilla"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        manifest_url: str = MANIFEST_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(http_client, user_agent=user_agent)
        self._manifest_url = manifest_url

    async def fetch_versions(self) -> list[VersionRecord]:
        manifest = await self._upstream.get_json(self._manifest_url, MojangVersionManifest)

        release_ids = [v.id for v in manifest.versions if v.type == VersionType.RELEASE.value]
        records = [
            create_version_record(version_id, version_id, VersionType.RELEASE, True)
            for version_id in take_until_inclusive(release_ids)
        ]

        self._logger.info("source_fetched", source=self.source_name, versions=len(records))
        return records
