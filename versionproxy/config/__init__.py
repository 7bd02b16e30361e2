"""Configuration module -- exports Settings and load_config."""

from versionproxy.config.loader import load_config, upstream_options
from versionproxy.config.settings import Settings

__all__ = ["Settings", "load_config", "upstream_options"]
