"""Node.js versions published as tags of the official ``node`` Docker image.

Docker Hub pages tag listings 100 at a time and links pages through a
``next`` URL.  We follow it sequentially, stopping after ``MAX_PAGES`` pages.
Hitting the cap is not an error; we keep what we have.

Tag parsing mirrors how the published data has always been computed: the
first three dot-separated parts are read as integer prefixes, so
``18.17.1-alpine`` counts as 18.17.1 while ``18-alpine``, ``lts`` and
``latest`` are dropped.  Only majors >= 12 are kept.  Many tags collapse to
the same triple; a :class:`UniqueOrderedSet` keyed by ``"major.minor.patch"``
keeps one of each.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from versionproxy.interfaces.version_source import IVersionSource
from versionproxy.models.upstream import DockerTagPage
from versionproxy.models.versions import NodeVersion, compare_node_versions
from versionproxy.providers.upstream_client import (
    DEFAULT_USER_AGENT,
    REGISTRY_RETRY,
    UpstreamClient,
)
from versionproxy.utils.collections import UniqueOrderedSet
from versionproxy.utils.logging import get_logger
from versionproxy.utils.versions import parse_leading_int

REGISTRY_URL = "https://hub.docker.com"
MAX_PAGES = 25
PAGE_SIZE = 100
REQUEST_TIMEOUT = 30.0
MIN_MAJOR = 12


def parse_node_tag(tag: str) -> NodeVersion | None:
    """Parse a Docker tag into a :class:`NodeVersion`, or ``None`` to discard it."""
    parts = tag.split(".")[:3]
    if len(parts) != 3:
        return None

    numbers = [parse_leading_int(part) for part in parts]
    if any(n is None or n < 0 for n in numbers):
        return None

    major, minor, patch = numbers
    if major < MIN_MAJOR:  # type: ignore[operator]
        return None
    return NodeVersion(major=major, minor=minor, patch=patch)


class DockerNodeSource(IVersionSource[NodeVersion]):
    """Ascending list of Node.js versions available as ``library/node`` tags."""

    cache_key = "docker:node"
    record_adapter: ClassVar[TypeAdapter[Any]] = TypeAdapter(list[NodeVersion])

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        image: str = "node",
        registry_url: str = REGISTRY_URL,
        max_pages: int = MAX_PAGES,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._image = image
        self._registry_url = registry_url.rstrip("/")
        self._max_pages = max_pages
        self._upstream = UpstreamClient(
            http_client,
            "docker_hub",
            retry=REGISTRY_RETRY,
            user_agent=user_agent,
            timeout=REQUEST_TIMEOUT,
            sleep=sleep,
        )
        self._logger = get_logger(__name__)

    def get_source_name(self) -> str:
        return f"docker_{self._image}"

    async def list_tags(self) -> list[str]:
        """Collect distinct tag names across at most ``max_pages`` pages."""
        next_url: str | None = (
            f"{self._registry_url}/v2/repositories/library/"
            f"{quote(self._image, safe='')}/tags?page_size={PAGE_SIZE}"
        )
        # dict keeps first-seen order, which makes runs reproducible
        tags: dict[str, None] = {}
        pages = 0

        while next_url and pages < self._max_pages:
            page = await self._upstream.get_json(next_url, DockerTagPage)
            pages += 1
            for tag in page.results:
                tags[tag.name] = None
            next_url = page.next

        if next_url:
            self._logger.info(
                "docker_tag_pagination_capped", image=self._image, pages=pages
            )
        self._logger.debug("docker_tags_listed", image=self._image, pages=pages, tags=len(tags))
        return list(tags)

    async def fetch_versions(self) -> list[NodeVersion]:
        versions: UniqueOrderedSet[NodeVersion] = UniqueOrderedSet()
        for tag in await self.list_tags():
            version = parse_node_tag(tag)
            if version is not None:
                versions.add(version.key, version)

        ordered = versions.sort(compare_node_versions)
        self._logger.info("source_fetched", source=self.get_source_name(), versions=len(ordered))
        return ordered
