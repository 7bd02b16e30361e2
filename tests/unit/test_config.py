"""Unit tests for Settings and the YAML config loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from versionproxy.config.loader import load_config, upstream_options
from versionproxy.config.settings import Settings
from versionproxy.utils.errors import ConfigurationError


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in ("APP_PORT", "AUTH_TOKEN", "REDIS_URL", "REFRESH_HOUR_UTC", "APP_ENV"):
            monkeypatch.delenv(name, raising=False)
        settings = _settings()

        assert settings.app_port == 8080
        assert settings.auth_enabled is False
        assert settings.redis_url == ""
        assert settings.refresh_hour_utc == 0
        assert settings.cache_ttl_seconds == 86400
        assert settings.is_production is False

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("AUTH_TOKEN", "s3cret")
        monkeypatch.setenv("REFRESH_HOUR_UTC", "4")
        settings = _settings()

        assert settings.auth_enabled is True
        assert settings.refresh_hour_utc == 4

    def test_invalid_refresh_hour(self) -> None:
        with pytest.raises(ConfigurationError):
            _settings(refresh_hour_utc=24)


class TestLoadConfig:
    def test_missing_file_yields_env_sections(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=_settings(redis_url="redis://x"))

        assert config["upstreams"] == {}
        assert config["cache"]["backend"] == "redis"
        assert config["refresh"]["hour_utc"] == 0

    def test_upstream_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "upstreams:\n"
            "  paper:\n"
            "    project_url: https://mirror.test/paper\n"
            "  docker_node:\n"
            "    registry_url: https://registry.test\n"
        )
        config = load_config(str(path), settings=_settings())

        assert upstream_options(config, "paper") == {"project_url": "https://mirror.test/paper"}
        assert upstream_options(config, "docker_node") == {"registry_url": "https://registry.test"}
        assert upstream_options(config, "vanilla") == {}

    def test_env_values_win_over_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("app:\n  port: 9999\n  name: versionproxy\n")
        config = load_config(str(path), settings=_settings(app_port=8081))

        assert config["app"]["port"] == 8081
        assert config["app"]["name"] == "versionproxy"

    def test_unknown_upstream_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("upstreams:\n  spigot:\n    url: https://example.test\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path), settings=_settings())

    @pytest.mark.parametrize("option", ["max_pages: 100", "image: python"])
    def test_docker_page_cap_and_image_are_fixed(self, tmp_path: Path, option: str) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(f"upstreams:\n  docker_node:\n    {option}\n")
        with pytest.raises(ConfigurationError, match="does not accept"):
            load_config(str(path), settings=_settings())

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("upstreams: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path), settings=_settings())

    def test_repository_config_is_valid(self) -> None:
        root = Path(__file__).resolve().parents[2]
        config = load_config(str(root / "config" / "config.yaml"), settings=_settings())
        assert upstream_options(config, "fabric") == {"meta_url": "https://meta.fabricmc.net/v2"}
