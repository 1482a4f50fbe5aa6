"""Settings files with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for introspec:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.introspec/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User settings** -- a single :class:`~introspec.models.DocumenterSettings`
  JSON file. See :func:`load_user_settings` and :func:`save_user_settings`.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, project-local config and user config into the
  effective settings.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from introspec.exceptions import ConfigError
from introspec.models import DocumenterSettings

_APP_NAME = "introspec"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "introspec.json"

ENV_COLLECTION_STRATEGY = "INTROSPEC_COLLECTION_STRATEGY"
ENV_REPLACEMENT_VERBS = "INTROSPEC_REPLACEMENT_VERBS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/introspec/`` (default ``~/.config/introspec/``).
    On macOS/Windows: ``~/.introspec/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/introspec/`` (default ``~/.local/share/introspec/``).
    On macOS/Windows: ``~/.introspec/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- User settings ---


def _user_settings_path() -> Path:
    """Path to the user settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    """Parse *path* as a JSON object, or return ``None`` if it does not exist."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_user_settings() -> DocumenterSettings:
    """Load the user settings from the XDG config directory.

    Returns:
        The validated settings, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _user_settings_path()
    data = _read_json(path, "user config")
    if data is None:
        return DocumenterSettings()
    try:
        return DocumenterSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid user config at {path}: {exc}") from exc


def save_user_settings(settings: DocumenterSettings) -> None:
    """Persist *settings* atomically to the user config file."""
    data = settings.model_dump(mode="json")
    _atomic_write(_user_settings_path(), json.dumps(data, indent=2) + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local settings from ``./introspec.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


def _env_overrides() -> dict[str, Any]:
    """Settings taken from ``INTROSPEC_*`` environment variables."""
    overrides: dict[str, Any] = {}
    strategy = os.environ.get(ENV_COLLECTION_STRATEGY)
    if strategy:
        overrides["collection_strategy"] = strategy.strip().lower()
    verbs = os.environ.get(ENV_REPLACEMENT_VERBS)
    if verbs:
        overrides["replacement_verbs"] = [v.strip().upper() for v in verbs.split(",") if v.strip()]
    return overrides


# --- Precedence resolution ---


def resolve_settings(**cli_overrides: Any) -> DocumenterSettings:
    """Resolve the effective settings.

    Precedence (high to low):
        1. CLI flags (keyword arguments whose value is not ``None``)
        2. Environment variables (``INTROSPEC_COLLECTION_STRATEGY``,
           ``INTROSPEC_REPLACEMENT_VERBS``)
        3. Project config (``./introspec.json``)
        4. User config (``~/.config/introspec/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    data = load_user_settings().model_dump()

    project = load_project_config()
    if project is not None:
        data.update(project)

    data.update(_env_overrides())
    data.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return DocumenterSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
