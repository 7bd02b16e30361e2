"""NeoForge releases from the NeoForged maven API.

The first dotted-numeric run of one- or two-digit groups in each version
string (``"20.4.80"`` in ``"20.4.80-beta"``) is taken as the base version;
entries without one are skipped.  Records are full-version ids with a
single-build range.
"""

from __future__ import annotations

import re

import httpx

from versionproxy.models.upstream import NeoForgeVersions
from versionproxy.models.versions import (
    VersionRange,
    VersionRecord,
    VersionType,
    create_version_record,
)
from versionproxy.providers.minecraft.base import MinecraftSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT
from versionproxy.utils.versions import take_until_inclusive

VERSIONS_URL = (
    "https://maven.neoforged.net/api/maven/versions/releases/net/neoforged/neoforge"
)

# Groups are capped at two digits with no right boundary, so "21.1.172"
# yields "21.1.17".  Published base versions have always been cut this way.
_BASE_VERSION_RE = re.compile(r"(\d{1,2}\.\d{1,2}(?:\.\d{1,2})?)")


def extract_base_version(version: str) -> str | None:
    """Return the first 2-3 component dotted number in *version*, or ``None``."""
    match = _BASE_VERSION_RE.search(version)
    return match.group(1) if match else None


class NeoForgeSource(MinecraftSource):
    source_name = "neoforge"
    cache_key = "minecraft:neoforge"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        versions_url: str = VERSIONS_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(http_client, user_agent=user_agent)
        self._versions_url = versions_url

    async def fetch_versions(self) -> list[VersionRecord]:
        listing = await self._upstream.get_json(self._versions_url, NeoForgeVersions)

        matched: list[tuple[str, str]] = []
        for version in listing.versions:
            base_version = extract_base_version(version)
            if base_version is None:
                self._logger.debug("neoforge_version_unparsed", version=version)
                continue
            matched.append((version, base_version))

        records = [
            create_version_record(
                version,
                base_version,
                VersionType.RELEASE,
                True,
                build_numbers=VersionRange(min=version, max=version),
            )
            for version, base_version in take_until_inclusive(matched, key=lambda m: m[1])
        ]

        self._logger.info("source_fetched", source=self.source_name, versions=len(records))
        return records
