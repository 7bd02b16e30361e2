"""Redis cache provider using ``redis.asyncio``.

Values are stored JSON-encoded with ``SET key value EX ttl`` so the expiry is
enforced by Redis itself and every worker process sees the same entries.
Any Redis or decoding failure surfaces as :class:`CacheError`; the refresh
orchestrator decides what to do about it.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from versionproxy.interfaces.cache_provider import ICacheProvider
from versionproxy.providers.cache.memory_cache import DEFAULT_TTL_SECONDS
from versionproxy.utils.errors import CacheError
from versionproxy.utils.logging import get_logger


class RedisCacheProvider(ICacheProvider):
    """Shared cache backed by a Redis server."""

    def __init__(self, client: redis.Redis, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        self._client = client
        self._default_ttl = ttl
        self._logger = get_logger(__name__)

    @classmethod
    def from_url(cls, redis_url: str, ttl: int = DEFAULT_TTL_SECONDS) -> RedisCacheProvider:
        client = redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client, ttl=ttl)

    def get_provider_name(self) -> str:
        return "redis"

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            raise CacheError(f"GET {key} failed: {exc}", provider_name="redis") from exc

        if raw is None:
            self._logger.debug("cache_miss", key=key)
            return None

        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise CacheError(
                f"Value under {key} is not valid JSON: {exc}", provider_name="redis"
            ) from exc

        self._logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        try:
            payload = json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise CacheError(
                f"Value for {key} is not JSON-serializable: {exc}", provider_name="redis"
            ) from exc

        try:
            await self._client.set(key, payload, ex=ttl if ttl is not None else self._default_ttl)
        except RedisError as exc:
            raise CacheError(f"SET {key} failed: {exc}", provider_name="redis") from exc
        self._logger.debug("cache_set", key=key, bytes=len(payload))

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise CacheError(f"DEL {key} failed: {exc}", provider_name="redis") from exc

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._client.exists(key))
        except RedisError as exc:
            raise CacheError(f"EXISTS {key} failed: {exc}", provider_name="redis") from exc

    async def ping(self) -> bool:
        """Return ``True`` if the server answers; never raises."""
        try:
            return bool(await self._client.ping())
        except RedisError as exc:
            self._logger.warning("redis_ping_failed", error=str(exc))
            return False

    async def close(self) -> None:
        await self._client.aclose()
