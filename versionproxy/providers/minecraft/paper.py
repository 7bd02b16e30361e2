"""Paper server builds from the PaperMC v2 API.

``GET /v2/projects/paper`` lists versions; each version's builds come from
``GET /v2/projects/paper/versions/{version}/builds``.  The builds array is
ascending, so its first and last entries bound the build range.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from versionproxy.models.upstream import PaperBuilds, PaperProject
from versionproxy.models.versions import VersionRange
from versionproxy.providers.minecraft.base import PerVersionBuildSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT

PROJECT_URL = "https://api.papermc.io/v2/projects/paper"


class PaperSource(PerVersionBuildSource):
    source_name = "paper"
    cache_key = "minecraft:paper"

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
        project = await self._upstream.get_json(self._project_url, PaperProject)
        return project.versions

    async def _fetch_build_range(self, version_id: str) -> VersionRange | None:
        url = f"{self._project_url}/versions/{quote(version_id, safe='')}/builds"
        builds = (await self._upstream.get_json(url, PaperBuilds)).builds
        if not builds:
            return None
        return VersionRange(min=str(builds[0].build), max=str(builds[-1].build))
