"""Tool version helpers."""

from __future__ import annotations

from typing import Optional

from packaging.version import InvalidVersion, Version

from . import __version__


def full_version() -> str:
    """Return the version string written into persisted files."""
    return __version__


def current_version() -> Version:
    return Version(__version__)


def parse_version(value: Optional[str]) -> Optional[Version]:
    """Parse a version string, returning None when it is missing or invalid."""
    if not value:
        return None
    try:
        return Version(value.strip())
    except InvalidVersion:
        return None


def is_older(recorded: Version, running: Version) -> bool:
    """True when the recorded version is strictly lower than the running one."""
    return recorded < running
