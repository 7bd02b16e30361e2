"""Cache providers.

MemoryCacheProvider is a TTLCache-backed store: fast but not shared across
processes.  RedisCacheProvider is used whenever ``REDIS_URL`` is configured so
every worker serves the same refreshed data.
"""

from versionproxy.providers.cache.memory_cache import MemoryCacheProvider
from versionproxy.providers.cache.redis_cache import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]
