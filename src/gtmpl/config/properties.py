"""Properties file persistence.

Template configuration is stored as a plain ``key = value`` text file:

    # Version 1.6.2
    # This file contains Gauge template configurations. Do not delete

    # Template download information for gauge java projects
    java = https://github.com/getgauge/template-java/releases/latest/download/java.zip

Comment lines start with ``#``. The first comment carries the version of
gtmpl that last wrote the file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from packaging.version import Version

from ..errors import PersistError, PropertiesVersionError
from ..version import parse_version

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^#\s*Version\s+(\S+)\s*$")


@dataclass
class Property:
    """A single configuration entry."""

    key: str
    value: str
    description: str


def config_dir(home: Path) -> Path:
    """Directory holding persisted configuration under the gtmpl home."""
    return home / "config"


def write(text: str, file_name: str, directory: Path) -> Path:
    """Write text to ``directory/file_name``, creating the directory if needed."""
    path = directory / file_name
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise PersistError(f"Failed to write {path}: {e}") from e
    logger.debug("Wrote %s", path)
    return path


def parse(text: str) -> Dict[str, str]:
    """Parse ``key = value`` lines, ignoring blank lines and comments."""
    values: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            logger.debug("Skipping malformed properties line: %r", line)
            continue
        key, value = stripped.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def read(path: Path) -> Optional[Dict[str, str]]:
    """Read key/value pairs from a properties file, or None if it does not exist."""
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as f:
        return parse(f.read())


def version_in_file(path: Path) -> Version:
    """Return the version recorded in the header of a properties file."""
    try:
        with path.open("r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise PropertiesVersionError(f"Failed to read {path}: {e}") from e
    for line in lines:
        match = _VERSION_RE.match(line.strip())
        if match:
            version = parse_version(match.group(1))
            if version is None:
                break
            return version
    raise PropertiesVersionError(f"No valid version header found in {path}")
