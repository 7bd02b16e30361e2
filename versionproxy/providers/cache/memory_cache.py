"""In-memory cache provider using cachetools.TTLCache.

Simple, fast cache suitable for development and single-process deployments.
Used when no ``REDIS_URL`` is configured; swap in :class:`RedisCacheProvider`
for multi-worker deployments without changing any business logic.
"""

from __future__ import annotations

import copy
from typing import Any

import structlog
from cachetools import TTLCache

from versionproxy.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TTL_SECONDS = 86400


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.  There are only a handful of cache keys, so the default
        is generous.
    ttl:
        Time-to-live in seconds for cache entries.
    """

    def __init__(self, max_size: int = 64, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        self._default_ttl = ttl
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        # hand out a copy so callers cannot mutate the stored payload
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        ``TTLCache`` applies the uniform TTL set at construction time; a
        per-call *ttl* different from it is logged and otherwise ignored.
        Every caller in this service uses the same daily TTL.
        """
        if ttl is not None and ttl != self._default_ttl:
            logger.debug("cache_ttl_ignored", key=key, requested=ttl, applied=self._default_ttl)
        self._cache[key] = copy.deepcopy(value)
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache
