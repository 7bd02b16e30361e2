"""Purpur server builds from the PurpurMC v2 API."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from versionproxy.models.upstream import PurpurProject, PurpurVersion
from versionproxy.models.versions import VersionRange
from versionproxy.providers.minecraft.base import PerVersionBuildSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT

PROJECT_URL = "https://api.purpurmc.org/v2/purpur"


class PurpurSource(PerVersionBuildSource):
    """Purpur versions with their ``builds.all`` range.

    Build identifiers are passed through as the strings Purpur returns.
    """

    source_name = "purpur"
    cache_key = "minecraft:purpur"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        project_url: str = PROJECT_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(http_client, user_agent=user_agent)
        self._project_url = project_url.rstrip("/")

    async def _list_versions(self) -> list[str]:
        project = await self._upstream.get_json(self._project_url, PurpurProject)
        return project.versions

    async def _fetch_build_range(self, version_id: str) -> VersionRange | None:
        url = f"{self._project_url}/{quote(version_id, safe='')}"
        builds = (await self._upstream.get_json(url, PurpurVersion)).builds.all
        if not builds:
            return None
        return VersionRange(min=builds[0], max=builds[-1])
