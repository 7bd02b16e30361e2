"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults checked into the repo
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set by the deployment

The YAML file is where upstream base URLs live.  Each entry under
``upstreams`` is passed as keyword arguments to the matching source::

    upstreams:
      paper:
        project_url: https://papermc.mirror.internal/v2/projects/paper
      docker_node:
        registry_url: https://registry.mirror.internal

Only base URLs can be overridden.  The Docker image and its page cap are
fixed.  Sources not present in the file use their built-in defaults.
"""

from pathlib import Path
from typing import Any

import yaml

from versionproxy.config.settings import Settings
from versionproxy.utils.errors import ConfigurationError

# Keyword arguments each source accepts from the YAML file.
UPSTREAM_OPTIONS: dict[str, frozenset[str]] = {
    "vanilla": frozenset({"manifest_url"}),
    "paper": frozenset({"project_url"}),
    "purpur": frozenset({"project_url"}),
    "fabric": frozenset({"meta_url"}),
    "forge": frozenset({"promotions_url"}),
    "neoforge": frozenset({"versions_url"}),
    "quilt": frozenset({"meta_url"}),
    "docker_node": frozenset({"registry_url"}),
}

SOURCE_NAMES = tuple(UPSTREAM_OPTIONS)


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.  A missing file is fine.
        settings: Settings to merge; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: the file is not valid YAML or has the wrong shape.
    """
    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{path} is not valid YAML: {exc}") from exc
    else:
        yaml_config = {}

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")

    upstreams = yaml_config.setdefault("upstreams", {})
    if not isinstance(upstreams, dict):
        raise ConfigurationError("'upstreams' must be a mapping of source name to options")
    for name, options in upstreams.items():
        if name not in SOURCE_NAMES:
            raise ConfigurationError(
                f"Unknown upstream '{name}'; expected one of {', '.join(SOURCE_NAMES)}"
            )
        if not isinstance(options, dict):
            raise ConfigurationError(f"upstreams.{name} must be a mapping")
        unsupported = sorted(set(options) - UPSTREAM_OPTIONS[name])
        if unsupported:
            raise ConfigurationError(
                f"upstreams.{name} does not accept {', '.join(unsupported)}; "
                f"allowed: {', '.join(sorted(UPSTREAM_OPTIONS[name]))}"
            )

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "cache": {
            "backend": "redis" if settings.redis_url else "memory",
            "ttl_seconds": settings.cache_ttl_seconds,
        },
        "refresh": {
            "hour_utc": settings.refresh_hour_utc,
            "on_startup": settings.refresh_on_startup,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def upstream_options(config: dict, source_name: str) -> dict[str, Any]:
    """Return the keyword overrides configured for *source_name* (may be empty)."""
    return dict(config.get("upstreams", {}).get(source_name) or {})


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
