"""Unit tests for the memory and Redis cache providers."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from versionproxy.providers.cache.memory_cache import MemoryCacheProvider
from versionproxy.providers.cache.redis_cache import RedisCacheProvider
from versionproxy.utils.errors import CacheError


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=10, ttl=86400)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("minecraft:paper") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("minecraft:paper", [{"id": "1.21"}], ttl=86400)
        assert await cache.get("minecraft:paper") == [{"id": "1.21"}]

    @pytest.mark.asyncio
    async def test_returned_value_is_a_copy(self, cache: MemoryCacheProvider) -> None:
        await cache.set("k", [{"id": "1.21"}])
        value = await cache.get("k")
        value.append({"id": "mutated"})
        assert await cache.get("k") == [{"id": "1.21"}]

    @pytest.mark.asyncio
    async def test_delete_and_exists(self, cache: MemoryCacheProvider) -> None:
        await cache.set("k", [1])
        assert await cache.exists("k") is True
        await cache.delete("k")
        assert await cache.exists("k") is False
        await cache.delete("k")  # no-op


# ======================================================================
# RedisCacheProvider
# ======================================================================


class TestRedisCacheProvider:
    @pytest.fixture()
    def client(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture()
    def cache(self, client: AsyncMock) -> RedisCacheProvider:
        return RedisCacheProvider(client, ttl=86400)

    def test_provider_name(self, cache: RedisCacheProvider) -> None:
        assert cache.get_provider_name() == "redis"

    @pytest.mark.asyncio
    async def test_set_encodes_json_with_expiry(self, cache, client) -> None:
        await cache.set("docker:node", [{"major": 20, "minor": 0, "patch": 0}], ttl=86400)

        key, payload = client.set.call_args.args
        assert key == "docker:node"
        assert json.loads(payload) == [{"major": 20, "minor": 0, "patch": 0}]
        assert client.set.call_args.kwargs["ex"] == 86400

    @pytest.mark.asyncio
    async def test_set_uses_default_ttl(self, client) -> None:
        cache = RedisCacheProvider(client, ttl=120)
        await cache.set("k", [])
        assert client.set.call_args.kwargs["ex"] == 120

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, cache, client) -> None:
        client.get.return_value = '[{"id":"1.21"}]'
        assert await cache.get("minecraft:vanilla") == [{"id": "1.21"}]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, cache, client) -> None:
        client.get.return_value = None
        assert await cache.get("minecraft:vanilla") is None

    @pytest.mark.asyncio
    async def test_get_invalid_json_raises_cache_error(self, cache, client) -> None:
        client.get.return_value = "{not json"
        with pytest.raises(CacheError):
            await cache.get("k")

    @pytest.mark.asyncio
    async def test_backend_errors_become_cache_error(self, cache, client) -> None:
        client.get.side_effect = RedisConnectionError("refused")
        client.set.side_effect = RedisConnectionError("refused")

        with pytest.raises(CacheError) as exc_info:
            await cache.get("k")
        assert exc_info.value.provider_name == "redis"

        with pytest.raises(CacheError):
            await cache.set("k", [1])

    @pytest.mark.asyncio
    async def test_exists_and_delete(self, cache, client) -> None:
        client.exists.return_value = 1
        assert await cache.exists("k") is True
        await cache.delete("k")
        client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_ping_failure_returns_false(self, cache, client) -> None:
        client.ping.side_effect = RedisConnectionError("down")
        assert await cache.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, cache, client) -> None:
        await cache.close()
        client.aclose.assert_awaited_once()
