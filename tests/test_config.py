"""Tests for environment settings, credential sources, and the cache location."""

from __future__ import annotations

from pathlib import Path

import diskcache
import pytest

from autotask_connection import config
from autotask_connection.config import get_cache_dir, load_settings, open_cache, resolve_credential
from autotask_connection.exceptions import ConfigError
from autotask_connection.models import ConnectionSettings


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env_source(self) -> None:
        assert resolve_credential("env:MY_SECRET", {"MY_SECRET": "s3cret"}) == "s3cret"

    def test_env_source_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTOTASK_TEST_SECRET", "from-env")
        assert resolve_credential("env:AUTOTASK_TEST_SECRET") == "from-env"

    def test_env_source_missing(self) -> None:
        with pytest.raises(ConfigError, match="MY_SECRET"):
            resolve_credential("env:MY_SECRET", {})

    def test_file_source_strips_whitespace(self, tmp_path: Path) -> None:
        secret = tmp_path / "secret"
        secret.write_text("  s3cret\n", encoding="utf-8")
        assert resolve_credential(f"file:{secret}") == "s3cret"

    def test_file_source_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_credential(f"file:{tmp_path / 'nope'}")

    def test_unknown_source(self) -> None:
        with pytest.raises(ConfigError, match="Unknown credential source"):
            resolve_credential("vault:autotask")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_empty_environment_gives_defaults(self) -> None:
        settings = load_settings({})
        assert settings == ConnectionSettings()
        assert settings.cache_ttl_seconds == 3306
        assert settings.cache_enabled is True

    def test_reads_all_variables(self) -> None:
        settings = load_settings(
            {
                "AUTOTASK_USERNAME": "api.user@example.com",
                "AUTOTASK_SECRET": "secret",
                "AUTOTASK_INTEGRATION_CODE": "ABC",
                "AUTOTASK_BASE_URL": "https://ws.autotask.net/atservicesrest/v1.0",
                "AUTOTASK_CACHE_TTL": "60",
                "AUTOTASK_CACHE_DIR": "/tmp/at-cache",
                "AUTOTASK_TIMEOUT": "10",
            }
        )

        assert settings.username == "api.user@example.com"
        assert settings.password == "secret"
        assert settings.integration_code == "ABC"
        assert settings.base_url == "https://ws.autotask.net/atservicesrest/v1.0"
        assert settings.cache_ttl_seconds == 60
        assert settings.cache_dir == "/tmp/at-cache"
        assert settings.timeout == 10

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTOTASK_USERNAME", "from-process")
        assert load_settings().username == "from-process"

    @pytest.mark.parametrize("value", ["0", "false", "No", " OFF "])
    def test_cache_can_be_disabled(self, value: str) -> None:
        assert load_settings({"AUTOTASK_CACHE": value}).cache_enabled is False

    @pytest.mark.parametrize("value", ["1", "true", "yes"])
    def test_cache_enabled_values(self, value: str) -> None:
        assert load_settings({"AUTOTASK_CACHE": value}).cache_enabled is True

    def test_source_variant_used_when_plain_absent(self, tmp_path: Path) -> None:
        secret = tmp_path / "secret"
        secret.write_text("from-file", encoding="utf-8")

        settings = load_settings(
            {
                "AUTOTASK_SECRET_SOURCE": f"file:{secret}",
                "AUTOTASK_USERNAME_SOURCE": "env:OTHER_USER",
                "OTHER_USER": "indirect",
            }
        )

        assert settings.password == "from-file"
        assert settings.username == "indirect"

    def test_plain_variable_wins_over_source(self) -> None:
        settings = load_settings(
            {
                "AUTOTASK_INTEGRATION_CODE": "plain",
                "AUTOTASK_INTEGRATION_CODE_SOURCE": "env:UNSET_VARIABLE",
            }
        )
        assert settings.integration_code == "plain"

    def test_unresolvable_source(self) -> None:
        with pytest.raises(ConfigError):
            load_settings({"AUTOTASK_SECRET_SOURCE": "env:UNSET_VARIABLE"})

    @pytest.mark.parametrize(
        "env",
        [
            {"AUTOTASK_CACHE_TTL": "soon"},
            {"AUTOTASK_CACHE_TTL": "-5"},
            {"AUTOTASK_TIMEOUT": "0"},
        ],
    )
    def test_invalid_values(self, env: dict[str, str]) -> None:
        with pytest.raises(ConfigError, match="Invalid connection settings"):
            load_settings(env)

    def test_password_hidden_from_repr(self) -> None:
        assert "hunter2" not in repr(load_settings({"AUTOTASK_SECRET": "hunter2"}))


# ---------------------------------------------------------------------------
# Cache location
# ---------------------------------------------------------------------------


class TestCacheDir:
    def test_xdg_cache_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(config, "_is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))

        path = get_cache_dir()

        assert path == tmp_path / "xdg" / "autotask-connection"
        assert path.is_dir()

    def test_non_xdg_platform(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(config, "_is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_cache_dir() == tmp_path / ".autotask-connection" / "cache"


class TestOpenCache:
    def test_disabled(self) -> None:
        assert open_cache(ConnectionSettings(cache_enabled=False)) is None

    def test_explicit_directory(self, tmp_path: Path) -> None:
        cache = open_cache(ConnectionSettings(cache_dir=str(tmp_path)))
        try:
            assert isinstance(cache, diskcache.Cache)
            assert Path(cache.directory) == tmp_path / "responses"
        finally:
            cache.close()

    def test_default_directory(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(config, "get_cache_dir", lambda: tmp_path / "default")

        cache = open_cache(ConnectionSettings())
        try:
            assert Path(cache.directory) == tmp_path / "default" / "responses"
        finally:
            cache.close()
