"""Template registry.

The effective set of templates is built fresh on every call: the
built-in defaults first, then whatever the user has persisted in
``template.properties`` on top. Persisted values always win.
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import urlparse

from packaging.version import Version
from rich.console import Console
from rich.table import Table

from ..config import properties
from ..config.properties import Property
from ..errors import (
    InvalidTemplateLocation,
    PropertiesVersionError,
    TemplateNotFound,
)
from ..version import current_version, full_version, is_older
from .closest import ClosestMatch

logger = logging.getLogger(__name__)

TEMPLATE_PROPERTIES = "template.properties"
COMMENT = "This file contains Gauge template configurations. Do not delete"
DEFAULT_LANGUAGES = ("dotnet", "java", "js", "python", "ruby", "ts")
MAX_SUGGESTIONS = 5

_URL_FORMAT = "https://github.com/getgauge/{repo}/releases/latest/download/{name}.zip"


def describe(name: str) -> str:
    return f"Template download information for gauge {name} projects"


def is_absolute_uri(value: str) -> bool:
    """True when value has both a scheme and a network location."""
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def default_property(repo_name: str, template_name: str) -> Property:
    url = _URL_FORMAT.format(repo=repo_name, name=template_name)
    return Property(key=template_name, value=url, description=describe(template_name))


class Templates:
    """An in-memory snapshot of template name -> location entries."""

    def __init__(self, entries: Optional[Dict[str, Property]] = None) -> None:
        self.entries: Dict[str, Property] = dict(entries or {})
        self.names: List[str] = sorted(self.entries)

    def update(self, key: str, value: str, validate: bool) -> None:
        """Add or overwrite a template location.

        With ``validate`` the value must be an absolute URI; otherwise it is
        stored as given.
        """
        if validate and not is_absolute_uri(value):
            raise InvalidTemplateLocation(
                f"Failed to add template '{key}'. The template location must be a valid (https) URI",
                key=key,
            )
        if key in self.entries:
            self.entries[key].value = value
        else:
            self.entries[key] = Property(key=key, value=value, description=describe(key))
            self.names.append(key)
        self.names.sort()

    def get(self, key: str) -> str:
        if key in self.entries:
            return self.entries[key].value
        raise TemplateNotFound(key, self.closest_match(key))

    def closest_match(self, key: str) -> List[str]:
        """Return up to five similar template names in alphabetical order."""
        matcher = ClosestMatch(self.names, size=2)
        matches = [m for m in matcher.closest_n(key, MAX_SUGGESTIONS) if m != ""]
        return sorted(matches)

    def to_properties(self) -> str:
        """Serialize the snapshot in the template.properties format."""
        parts = [f"# Version {full_version()}\n# {COMMENT}\n"]
        for name in self.names:
            prop = self.entries[name]
            parts.append(f"\n# {prop.description}\n{prop.key} = {prop.value}\n")
        return "".join(parts)

    def write(self, home: Path) -> Path:
        return properties.write(
            self.to_properties(), TEMPLATE_PROPERTIES, properties.config_dir(home)
        )


def properties_path(home: Path) -> Path:
    return properties.config_dir(home) / TEMPLATE_PROPERTIES


def defaults() -> Templates:
    """Built-in templates, one per supported language."""
    entries = {
        lang: default_property(f"template-{lang}", lang) for lang in DEFAULT_LANGUAGES
    }
    return Templates(entries)


def merge_templates(home: Path) -> Templates:
    """Return the defaults overlaid with the user's persisted templates."""
    templates = defaults()
    path = properties_path(home)
    try:
        configs = properties.read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return templates
    if configs is None:
        return templates
    for key, value in configs.items():
        templates.update(key, value, validate=False)
    return templates


def merge(home: Path, running: Optional[Version] = None) -> bool:
    """Rewrite template.properties when it is missing or was written by an older gtmpl.

    Returns True when the file was (re)written.
    """
    running = running or current_version()
    path = properties_path(home)
    try:
        recorded = properties.version_in_file(path)
    except PropertiesVersionError as e:
        logger.debug("Refreshing %s: %s", path, e)
    else:
        if not is_older(recorded, running):
            return False
        logger.debug("Refreshing %s written by %s", path, recorded)
    merge_templates(home).write(home)
    return True


def update_template(name: str, value: str, home: Path) -> None:
    """Add or change a template location and persist it."""
    templates = merge_templates(home)
    templates.update(name, value, validate=True)
    templates.write(home)


def get_template(name: str, home: Path) -> str:
    return merge_templates(home).get(name)


def all_names(home: Path) -> str:
    return "\n".join(merge_templates(home).names)


def list_templates(home: Path, machine_readable: bool = False) -> str:
    """Format every template as a table, or as JSON for machines."""
    templates = merge_templates(home)
    entries = [templates.entries[name] for name in templates.names]
    if machine_readable:
        return json.dumps(
            [
                {"key": p.key, "value": p.value, "description": p.description}
                for p in entries
            ],
            indent=2,
        )

    table = Table("Template Name", "Location", box=None, pad_edge=False)
    for prop in entries:
        table.add_row(prop.key, prop.value)
    buf = io.StringIO()
    Console(file=buf, width=240, color_system=None, highlight=False).print(table)
    return buf.getvalue().rstrip() + "\n"
