"""Configuration management for gtmpl."""

from .properties import Property, config_dir
from .settings import (
    DEFAULT_SETTINGS,
    Settings,
    allow_insecure_download,
    gtmpl_home,
    load_settings,
    save_setting,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "Property",
    "Settings",
    "allow_insecure_download",
    "config_dir",
    "gtmpl_home",
    "load_settings",
    "save_setting",
]
