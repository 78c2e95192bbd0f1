"""Tests for restdsl.config -- XDG paths, config files, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from restdsl.config import (
    get_config_dir,
    get_data_dir,
    load_project_config,
    load_user_config,
    resolve_config,
)
from restdsl.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:

    def test_config_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("restdsl.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        assert get_config_dir() == tmp_path / "cfg" / "restdsl"
        assert not (tmp_path / "cfg").exists()

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("restdsl.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "restdsl"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("restdsl.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".restdsl"
        assert get_data_dir() == tmp_path / ".restdsl" / "logs"

    def test_data_dir_is_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("restdsl.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        path = get_data_dir()
        assert path == tmp_path / "data" / "restdsl"
        assert path.is_dir()


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:

    def test_missing_files_are_none(self, isolated_config: Path) -> None:
        assert load_user_config() is None
        assert load_project_config() is None

    def test_user_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config" / "restdsl" / "config.json", {"format": "yaml"})
        assert load_user_config() == {"format": "yaml"}

    def test_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "restdsl.json", {"filter": "get*"})
        assert load_project_config() == {"filter": "get*"}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "restdsl.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config" / "restdsl" / "config.json", ["yaml"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_user_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:

    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.filter is None
        assert config.destination == "direct:{operation_id}"
        assert config.format == "dsl"
        assert config.continue_on_error is False
        assert config.rest.is_blank()

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "restdsl" / "config.json",
            {"format": "yaml", "rest": {"component": "servlet", "host": "localhost"}},
        )
        _write_json(isolated_config / "restdsl.json", {"rest": {"component": "undertow"}})
        config = resolve_config()
        assert config.format == "yaml"
        assert config.rest.component == "undertow"
        assert config.rest.host == "localhost"

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "restdsl.json", {"filter": "get*", "format": "yaml"})
        monkeypatch.setenv("RESTDSL_FILTER", "listPets")
        monkeypatch.setenv("RESTDSL_DESTINATION", "seda:{operation_id}")
        config = resolve_config()
        assert config.filter == "listPets"
        assert config.destination == "seda:{operation_id}"
        assert config.format == "yaml"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RESTDSL_FORMAT", "json")
        config = resolve_config(
            {"format": "events", "filter": None, "rest": {"context_path": "/api", "host": None}}
        )
        assert config.format == "events"
        assert config.filter is None
        assert config.rest.context_path == "/api"

    def test_empty_env_var_is_ignored(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RESTDSL_FORMAT", "")
        assert resolve_config().format == "dsl"

    def test_invalid_values_raise(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "restdsl.json", {"continue_on_error": "sometimes"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
