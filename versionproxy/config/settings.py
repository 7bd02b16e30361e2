"""Application settings loaded from environment variables via pydantic-settings.

Two sources are read, in priority order:

1. **Environment variables** -- e.g. ``REDIS_URL=redis://cache:6379/0``
2. **.env file** -- key=value lines in the project root, for local work

Field ``redis_url`` maps to env var ``REDIS_URL`` and so on.  Empty strings
mean "not configured": no ``AUTH_TOKEN`` disables authentication and no
``REDIS_URL`` selects the in-memory cache.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from versionproxy.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """versionproxy settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    # === Access ===
    auth_token: str = ""  # Bearer token required on every request when set

    # === Cache ===
    redis_url: str = ""  # e.g. redis://localhost:6379/0; empty = in-process TTLCache
    cache_ttl_seconds: int = 86400

    # === Refresh ===
    refresh_hour_utc: int = 0
    refresh_on_startup: bool = True

    # === Upstreams ===
    user_agent: str = "versionproxy/0.1.0"

    @field_validator("refresh_hour_utc")
    @classmethod
    def _check_refresh_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ConfigurationError(f"REFRESH_HOUR_UTC must be within 0-23, got {value}")
        return value

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_token)

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"
