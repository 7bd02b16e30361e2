"""Unit tests for the Docker Hub node tag source."""

from __future__ import annotations

import httpx
import pytest

from tests.conftest import json_response, make_http_client
from versionproxy.models.results import FetchFailure
from versionproxy.models.versions import NodeVersion
from versionproxy.providers.docker.node_source import (
    MAX_PAGES,
    DockerNodeSource,
    parse_node_tag,
)
from versionproxy.utils.errors import UpstreamFetchError

FIRST_PAGE = "https://hub.docker.com/v2/repositories/library/node/tags?page_size=100"


def _page(names: list[str], next_url: str | None = None) -> dict:
    return {"count": 999, "next": next_url, "results": [{"name": name} for name in names]}


# ======================================================================
# parse_node_tag()
# ======================================================================


class TestParseNodeTag:
    def test_plain_triple(self) -> None:
        assert parse_node_tag("14.2.0") == NodeVersion(major=14, minor=2, patch=0)

    def test_variant_suffix_is_ignored(self) -> None:
        assert parse_node_tag("18.17.1-alpine3.18") == NodeVersion(major=18, minor=17, patch=1)

    @pytest.mark.parametrize("tag", ["latest", "lts", "18", "18-alpine", "20.11", "current-slim"])
    def test_tags_without_three_numbers_are_discarded(self, tag: str) -> None:
        assert parse_node_tag(tag) is None

    def test_majors_below_12_are_discarded(self) -> None:
        assert parse_node_tag("8.9.1") is None
        assert parse_node_tag("11.15.0") is None
        assert parse_node_tag("12.0.0") == NodeVersion(major=12, minor=0, patch=0)

    def test_non_numeric_component_is_discarded(self) -> None:
        assert parse_node_tag("18.x.1") is None


# ======================================================================
# DockerNodeSource
# ======================================================================


class TestDockerNodeSource:
    @pytest.mark.asyncio
    async def test_follows_next_and_sorts_ascending(self, no_sleep) -> None:
        second = "https://hub.docker.com/v2/repositories/library/node/tags?page=2&page_size=100"
        routes = {
            FIRST_PAGE: _page(["20.11.1", "latest", "18.0.0-alpine", "8.9.1"], next_url=second),
            second: _page(["18.0.0", "18.0.0-bullseye", "14.2.0", "20.2.0"]),
        }
        source = DockerNodeSource(make_http_client(routes), sleep=no_sleep)

        versions = await source.fetch_versions()

        assert [v.key for v in versions] == ["14.2.0", "18.0.0", "20.2.0", "20.11.1"]

    @pytest.mark.asyncio
    async def test_pagination_stops_after_max_pages(self, no_sleep) -> None:
        requested: list[str] = []

        def endless(url: str) -> httpx.Response:
            requested.append(url)
            page_no = len(requested)
            return json_response(_page([f"{page_no + 11}.0.0"], next_url=f"https://hub.test/p{page_no + 1}"))

        source = DockerNodeSource(make_http_client(handler=endless), sleep=no_sleep)

        versions = await source.fetch_versions()

        assert len(requested) == MAX_PAGES == 25
        assert len(versions) == 25
        assert versions[0].key == "12.0.0"

    @pytest.mark.asyncio
    async def test_duplicate_triples_collapse(self, no_sleep) -> None:
        routes = {FIRST_PAGE: _page(["18.0.0", "18.0.0-alpine", "18.0.0-slim"])}
        versions = await DockerNodeSource(make_http_client(routes), sleep=no_sleep).fetch_versions()
        assert versions == [NodeVersion(major=18, minor=0, patch=0)]

    @pytest.mark.asyncio
    async def test_retries_transient_registry_errors(self, no_sleep) -> None:
        routes = {FIRST_PAGE: [httpx.Response(429), json_response(_page(["20.0.0"]))]}
        http = make_http_client(routes)

        versions = await DockerNodeSource(http, sleep=no_sleep).fetch_versions()

        assert [v.key for v in versions] == ["20.0.0"]
        assert http.get.await_count == 2
        assert http.get.call_args.kwargs["timeout"] == 30.0

    @pytest.mark.asyncio
    async def test_persistent_failure_is_fetch_failure(self, no_sleep) -> None:
        http = make_http_client({FIRST_PAGE: [httpx.Response(503)]})

        result = await DockerNodeSource(http, sleep=no_sleep).fetch()

        assert isinstance(result, FetchFailure)
        assert isinstance(result.error, UpstreamFetchError)
        assert http.get.await_count == 3

    def test_cache_key_and_name(self) -> None:
        source = DockerNodeSource(make_http_client())
        assert source.cache_key == "docker:node"
        assert source.get_source_name() == "docker_node"

    def test_dump_and_load(self, node_versions) -> None:
        source = DockerNodeSource(make_http_client())
        payload = source.dump(node_versions)
        assert payload[0] == {"major": 18, "minor": 0, "patch": 0}
        assert source.load(payload) == node_versions
