"""Configuration management with XDG paths and precedence resolution.

This module resolves the effective :class:`~restdsl.models.GeneratorConfig`
for a ``restdsl`` invocation:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.restdsl/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- ``<config_dir>/config.json`` with personal defaults
  (e.g. a preferred output format or REST component).
* **Project config** -- ``./restdsl.json``, typically committed next to the
  OpenAPI document it generates from.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags over
  ``RESTDSL_*`` environment variables over project config over user config
  over defaults.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from restdsl.exceptions import ConfigError
from restdsl.models import GeneratorConfig

_APP_NAME = "restdsl"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "restdsl.json"

# Environment variable -> GeneratorConfig field
_ENV_VARS = {
    "RESTDSL_FILTER": "filter",
    "RESTDSL_DESTINATION": "destination",
    "RESTDSL_FORMAT": "format",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory.

    On Linux/BSD: ``$XDG_CONFIG_HOME/restdsl/`` (default ``~/.config/restdsl/``).
    On macOS/Windows: ``~/.restdsl/``.

    The directory is not created; a missing directory simply means no user
    config.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/restdsl/`` (default ``~/.local/share/restdsl/``).
    On macOS/Windows: ``~/.restdsl/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config files ---


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_user_config() -> Optional[dict[str, Any]]:
    """Load ``<config_dir>/config.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json_object(get_config_dir() / _CONFIG_FILENAME, "user config")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./restdsl.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json_object(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


# --- Precedence resolution ---


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*; ``None`` values are skipped."""
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(cli_overrides: Optional[dict[str, Any]] = None) -> GeneratorConfig:
    """Resolve the generator configuration with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (*cli_overrides*; ``None`` values are ignored)
        2. Environment variables (``RESTDSL_FILTER``, ``RESTDSL_DESTINATION``,
           ``RESTDSL_FORMAT``)
        3. Project config (``./restdsl.json``)
        4. User config (``<config_dir>/config.json``)
        5. Defaults

    Args:
        cli_overrides: Field values from the command line, shaped like
            :class:`~restdsl.models.GeneratorConfig` (``rest`` nested).

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If a config file is malformed or the merged values fail
            validation.
    """
    data: dict[str, Any] = {}
    for layer in (load_user_config(), load_project_config()):
        if layer is not None:
            data = _merge(data, layer)

    env_layer = {
        field: os.environ[var] for var, field in _ENV_VARS.items() if os.environ.get(var)
    }
    data = _merge(data, env_layer)
    data = _merge(data, cli_overrides or {})

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
