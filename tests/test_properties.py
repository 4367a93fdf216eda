from __future__ import annotations

from pathlib import Path

import pytest
from packaging.version import Version

from gtmpl.config import properties
from gtmpl.errors import PersistError, PropertiesVersionError


def test_parse_skips_comments_and_splits_on_first_equals() -> None:
    text = """
# Version 1.6.2
# This file contains Gauge template configurations. Do not delete

# Template download information for gauge java projects
java = https://example.com/java.zip?token=a=b
   python=https://example.com/python.zip
not a property line
""".lstrip()
    values = properties.parse(text)
    assert values == {
        "java": "https://example.com/java.zip?token=a=b",
        "python": "https://example.com/python.zip",
    }


def test_read_missing_file_returns_none(tmp_path: Path) -> None:
    assert properties.read(tmp_path / "template.properties") is None


def test_write_creates_directory(tmp_path: Path) -> None:
    target_dir = tmp_path / "home" / "config"
    path = properties.write("a = b\n", "template.properties", target_dir)
    assert path == target_dir / "template.properties"
    assert properties.read(path) == {"a": "b"}


def test_write_failure_raises_persist_error(tmp_path: Path) -> None:
    blocker = tmp_path / "config"
    blocker.write_text("not a directory")
    with pytest.raises(PersistError):
        properties.write("a = b\n", "template.properties", blocker)


def test_version_in_file(tmp_path: Path) -> None:
    path = tmp_path / "template.properties"
    path.write_text("# Version 1.4.0\n# comment\n\njava = x\n")
    assert properties.version_in_file(path) == Version("1.4.0")


@pytest.mark.parametrize(
    "content",
    ["java = x\n", "# Version not-a-version\n", "# Something else\n"],
)
def test_version_in_file_rejects_bad_headers(tmp_path: Path, content: str) -> None:
    path = tmp_path / "template.properties"
    path.write_text(content)
    with pytest.raises(PropertiesVersionError):
        properties.version_in_file(path)


def test_version_in_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PropertiesVersionError):
        properties.version_in_file(tmp_path / "missing.properties")
