"""Custom exception hierarchy for versionproxy.

All application exceptions inherit from :class:`VersionProxyError`, which
carries an optional ``provider_name`` so log lines and the error reporter can
identify which upstream (e.g. "paper", "docker_hub", "redis") caused the
failure.

The hierarchy is organized by where the failure happens:

    VersionProxyError  (base -- catch-all for any versionproxy error)
    +-- UpstreamFetchError   (network failure, non-2xx status, timeout)
    +-- UpstreamSchemaError  (upstream JSON did not match the expected shape)
    +-- CacheError           (cache backend unavailable or payload unreadable)
    +-- ConfigurationError   (startup / invalid config)

Adapters raise the upstream errors; the refresh orchestrator never lets any
of them reach the HTTP layer.
"""


class VersionProxyError(Exception):
    """Base exception for all versionproxy errors.

    ``__str__`` prefixes the provider name in brackets for easier log
    scanning, e.g. ``[purpur] HTTP 503 for https://api.purpurmc.org/v2/purpur``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class UpstreamFetchError(VersionProxyError):
    """Raised when an upstream request fails (transport error or non-2xx).

    ``status_code`` is set when the upstream answered with an HTTP error and
    is ``None`` for transport-level failures (DNS, connect, timeout).
    """

    def __init__(
        self,
        message: str = "Upstream request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class UpstreamSchemaError(VersionProxyError):
    """Raised when an upstream response does not match its expected schema."""

    def __init__(
        self,
        message: str = "Upstream response had an unexpected shape",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Infrastructure errors
# ---------------------------------------------------------------------------

class CacheError(VersionProxyError):
    """Raised when the cache backend cannot be read from or written to."""

    def __init__(
        self,
        message: str = "Cache operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(VersionProxyError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
