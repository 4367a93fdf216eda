"""Tool settings.

Settings live in ``<home>/gtmpl.yml`` where home is ``$GTMPL_HOME`` or
``~/.gtmpl``. Missing files and missing keys fall back to defaults, and a
few keys can be overridden from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, TypedDict

import yaml

from ..errors import SettingsError

SETTINGS_FILE = "gtmpl.yml"
HOME_ENV = "GTMPL_HOME"
INSECURE_ENV = "GTMPL_ALLOW_INSECURE_DOWNLOAD"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings(TypedDict):
    """Configuration read from the settings file."""

    allow_insecure_download: bool
    plugin_install_command: str  # gauge install {language}


DEFAULT_SETTINGS = Settings(
    allow_insecure_download=False,
    plugin_install_command="gauge install {language}",
)


def gtmpl_home() -> Path:
    """Return the gtmpl home directory."""
    override = os.getenv(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".gtmpl"


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise SettingsError(f"'{key}' must be true or false, got '{value}'")


def _parse_settings(data: Dict[str, Any]) -> Settings:
    out = Settings(**DEFAULT_SETTINGS)
    for key, value in data.items():
        if key == "allow_insecure_download":
            out["allow_insecure_download"] = _to_bool(key, value)
        elif key == "plugin_install_command":
            if not isinstance(value, str) or not value.strip():
                raise SettingsError("'plugin_install_command' must be a non-empty string")
            try:
                value.format(language="java")
            except (IndexError, KeyError, ValueError) as e:
                raise SettingsError(
                    f"'plugin_install_command' may only use the {{language}} placeholder: {e}"
                ) from e
            out["plugin_install_command"] = value
        else:
            raise SettingsError(f"Unknown setting '{key}'")
    return out


def load_settings(home: Optional[Path] = None) -> Settings:
    """Load settings from the home directory, applying environment overrides."""
    path = (home or gtmpl_home()) / SETTINGS_FILE
    data: Dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Failed to parse {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"{path} must contain a mapping")
    settings = _parse_settings(data)

    env_value = os.getenv(INSECURE_ENV)
    if env_value:
        settings["allow_insecure_download"] = _to_bool(INSECURE_ENV, env_value)
    return settings


def save_setting(key: str, value: str, home: Optional[Path] = None) -> Settings:
    """Validate and persist a single setting, returning the updated settings."""
    root = home or gtmpl_home()
    path = root / SETTINGS_FILE
    current: Dict[str, Any] = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            current = yaml.safe_load(f) or {}
    current[key] = value
    settings = _parse_settings(current)

    root.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(dict(settings), f, sort_keys=False)
    return settings


def allow_insecure_download(settings: Settings) -> bool:
    return settings["allow_insecure_download"]
