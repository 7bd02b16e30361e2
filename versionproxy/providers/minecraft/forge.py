"""Forge promotions from ``promotions_slim.json``.

The file maps ``"<mc>-recommended"`` / ``"<mc>-latest"`` to a Forge version.
Each kept key becomes one record with id ``"<mc>-<forge>"`` and a
single-build range.

The map is walked in the order the upstream file lists it and stops at the
first 1.7.10 entry, same as every other source.  Forge does not promise any
ordering for this file; when the stop drops later entries we log a warning
so an ordering change upstream is visible instead of silently shrinking the
result.
"""

from __future__ import annotations

import httpx

from versionproxy.models.upstream import ForgePromotions
from versionproxy.models.versions import (
    VersionRange,
    VersionRecord,
    VersionType,
    create_version_record,
)
from versionproxy.providers.minecraft.base import MinecraftSource
from versionproxy.providers.upstream_client import DEFAULT_USER_AGENT
from versionproxy.utils.versions import HISTORICAL_FLOOR, take_until_inclusive

PROMOTIONS_URL = (
    "https://files.minecraftforge.net/net/minecraftforge/forge/promotions_slim.json"
)


class ForgeSource(MinecraftSource):
    source_name = "forge"
    cache_key = "minecraft:forge"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        promotions_url: str = PROMOTIONS_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(http_client, user_agent=user_agent)
        self._promotions_url = promotions_url

    async def fetch_versions(self) -> list[VersionRecord]:
        promotions = await self._upstream.get_json(self._promotions_url, ForgePromotions)

        # (mc_version, forge_version, is_recommended) in upstream order
        promos = [
            (key.split("-")[0], forge_version, "recommended" in key)
            for key, forge_version in promotions.promos.items()
            if "recommended" in key or "latest" in key
        ]
        kept = take_until_inclusive(promos, key=lambda promo: promo[0])

        if len(kept) < len(promos):
            self._logger.warning(
                "forge_promotions_truncated",
                floor=HISTORICAL_FLOOR,
                kept=len(kept),
                dropped=len(promos) - len(kept),
            )

        records = [
            create_version_record(
                f"{mc_version}-{forge_version}",
                mc_version,
                VersionType.RELEASE,
                is_recommended,
                build_numbers=VersionRange(min=forge_version, max=forge_version),
            )
            for mc_version, forge_version, is_recommended in kept
        ]

        self._logger.info("source_fetched", source=self.source_name, versions=len(records))
        return records
