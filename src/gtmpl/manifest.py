"""Project manifest and template metadata models."""

from __future__ import annotations

import json
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MetadataParseError

MANIFEST_FILE = "manifest.json"
METADATA_FILE = "metadata.json"


class Manifest(BaseModel):
    """Contents of a project's manifest.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language: str = Field(default="", alias="Language")


class TemplateMetadata(BaseModel):
    """Contents of the metadata.json shipped inside a template archive."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")
    version: str = Field(default="", alias="Version")
    post_install_cmd: str = Field(default="", alias="PostInstallCmd")
    post_install_msg: str = Field(default="", alias="PostInstallMsg")

    @field_validator(
        "name", "description", "version", "post_install_cmd", "post_install_msg", mode="before"
    )
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


def project_manifest(project_root: Path) -> Manifest:
    """Read manifest.json from a project root.

    Raises OSError when the file cannot be read and ValueError when it is
    not a valid manifest.
    """
    path = project_root / MANIFEST_FILE
    with path.open("r", encoding="utf-8") as f:
        return Manifest.model_validate(json.load(f))


def is_gauge_project(project_root: Path) -> bool:
    """True when the directory has a manifest naming a language."""
    try:
        manifest = project_manifest(project_root)
    except (OSError, ValueError):
        return False
    return manifest.language != ""


def read_metadata(path: Path) -> TemplateMetadata:
    try:
        with path.open("r", encoding="utf-8") as f:
            contents = f.read()
    except OSError as e:
        raise MetadataParseError(f"Failed to read file contents of {path}: {e}") from e
    try:
        return TemplateMetadata.model_validate_json(contents)
    except ValidationError as e:
        raise MetadataParseError(f"Failed to parse {path}: {e}") from e
