"""Utility modules for versionproxy.

- **collections** -- ``UniqueOrderedSet``, the keyed dedup container.
- **errors** -- exception hierarchy rooted at ``VersionProxyError``.
- **logging** -- structlog setup (console in development, JSON in production).
- **versions** -- lenient version parsing, the Java / data-pack classifier
  and the ``take_until_inclusive`` historical-floor helper.
"""

from versionproxy.utils.collections import UniqueOrderedSet
from versionproxy.utils.errors import (
    CacheError,
    ConfigurationError,
    UpstreamFetchError,
    UpstreamSchemaError,
    VersionProxyError,
)
from versionproxy.utils.logging import configure_logging, get_logger
from versionproxy.utils.versions import (
    HISTORICAL_FLOOR,
    Classification,
    classify,
    parse_leading_float,
    parse_leading_int,
    parse_version_pair,
    take_until_inclusive,
)

__all__ = [
    "HISTORICAL_FLOOR",
    "CacheError",
    "Classification",
    "ConfigurationError",
    "UniqueOrderedSet",
    "UpstreamFetchError",
    "UpstreamSchemaError",
    "VersionProxyError",
    "classify",
    "configure_logging",
    "get_logger",
    "parse_leading_float",
    "parse_leading_int",
    "parse_version_pair",
    "take_until_inclusive",
]
