"""Abstract base class for cache backends.

The refresh orchestrator only ever needs "get" and "set with expiry"; the
backend is injected so production can use Redis while tests and
single-process deployments use the in-memory provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value caches with per-entry expiry.

    Values are JSON-compatible Python structures (lists of dicts, in
    practice).  Implementations raise
    :class:`~versionproxy.utils.errors.CacheError` when the backend is
    unreachable.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        Parameters
        ----------
        key:
            The cache key, e.g. ``"minecraft:paper"``.
        value:
            A JSON-serializable value.
        ttl:
            Time-to-live in seconds.  ``None`` uses the backend default.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; a no-op if it does not exist."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""

    def get_provider_name(self) -> str:
        return type(self).__name__
