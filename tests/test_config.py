"""Tests for introspec.config -- XDG paths, atomic writes, settings precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from introspec.config import (
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_project_config,
    load_user_settings,
    resolve_settings,
    save_user_settings,
)
from introspec.exceptions import ConfigError
from introspec.models import DocumenterSettings, EnrichmentStrategy


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
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("introspec.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "introspec"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("introspec.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        assert get_config_dir() == tmp_path / "custom" / "introspec"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("introspec.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".local" / "share" / "introspec"

    def test_fallback_on_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("introspec.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".introspec"
        assert get_data_dir() == tmp_path / ".introspec" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        _atomic_write(target, "hello world")
        assert target.read_text(encoding="utf-8") == "hello world"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        target.write_text("old content", encoding="utf-8")
        _atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "test.txt"
        _atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        with patch("introspec.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# User and project settings
# ---------------------------------------------------------------------------


class TestUserSettings:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_user_settings() == DocumenterSettings()

    def test_round_trip(self, isolated_config: Path) -> None:
        settings = DocumenterSettings(collection_strategy="union", default_tags=("misc",))
        save_user_settings(settings)
        assert load_user_settings() == settings

    def test_invalid_json(self, isolated_config: Path) -> None:
        (get_config_dir() / "config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid user config"):
            load_user_settings()

    def test_invalid_value(self, isolated_config: Path) -> None:
        _write_json(get_config_dir() / "config.json", {"collection_strategy": "sometimes"})
        with pytest.raises(ConfigError):
            load_user_settings()


class TestProjectConfig:
    def test_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loaded_from_cwd(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "introspec.json", {"route_format": "xml"})
        assert load_project_config() == {"route_format": "xml"}

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "introspec.json", ["json"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveSettings:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_settings() == DocumenterSettings()

    def test_project_over_user(self, isolated_config: Path) -> None:
        save_user_settings(DocumenterSettings(route_format="jsv", default_category="user"))
        _write_json(isolated_config / "introspec.json", {"route_format": "xml"})

        settings = resolve_settings()
        assert settings.route_format == "xml"
        assert settings.default_category == "user"

    def test_env_over_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "introspec.json", {"collection_strategy": "set_if_empty"})
        monkeypatch.setenv("INTROSPEC_COLLECTION_STRATEGY", "UNION")
        monkeypatch.setenv("INTROSPEC_REPLACEMENT_VERBS", "get, post")

        settings = resolve_settings()
        assert settings.collection_strategy == EnrichmentStrategy.UNION
        assert settings.replacement_verbs == ("GET", "POST")

    def test_cli_over_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTROSPEC_COLLECTION_STRATEGY", "union")
        settings = resolve_settings(collection_strategy=EnrichmentStrategy.SET_IF_EMPTY)
        assert settings.collection_strategy == EnrichmentStrategy.SET_IF_EMPTY

    def test_none_cli_values_ignored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTROSPEC_COLLECTION_STRATEGY", "union")
        assert resolve_settings(collection_strategy=None).collection_strategy == EnrichmentStrategy.UNION

    def test_invalid_env_value(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTROSPEC_COLLECTION_STRATEGY", "sometimes")
        with pytest.raises(ConfigError, match="Invalid settings"):
            resolve_settings()
