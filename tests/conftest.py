from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Dict, Optional

import pytest


@pytest.fixture
def home(monkeypatch, tmp_path: Path) -> Path:
    """A throwaway gtmpl home directory."""
    path = tmp_path / "gtmpl-home"
    path.mkdir()
    monkeypatch.setenv("GTMPL_HOME", str(path))
    monkeypatch.delenv("GTMPL_ALLOW_INSECURE_DOWNLOAD", raising=False)
    return path


def template_files(
    post_install_cmd: str = "", post_install_msg: str = "Run `gauge run specs`."
) -> Dict[str, str]:
    metadata = {
        "Name": "java",
        "Description": "Java template",
        "Version": "0.1.0",
        "PostInstallCmd": post_install_cmd,
        "PostInstallMsg": post_install_msg,
    }
    return {
        "manifest.json": json.dumps({"Language": "java", "Plugins": ["html-report"]}),
        "metadata.json": json.dumps(metadata),
        ".gitignore": "target/\n",
        "specs/example.spec": "# Specification Heading\n",
        "src/test/java/StepImplementation.java": "public class StepImplementation {}\n",
    }


def make_template_zip(
    directory: Path,
    files: Optional[Dict[str, str]] = None,
    prefix: str = "template-java/",
    name: str = "java.zip",
) -> Path:
    """Write a template archive whose entries live under prefix."""
    archive = directory / name
    with zipfile.ZipFile(archive, "w") as zf:
        for rel, content in (files if files is not None else template_files()).items():
            zf.writestr(prefix + rel, content)
    return archive


@pytest.fixture
def template_zip(tmp_path: Path):
    """Factory building template archives in a scratch directory."""
    archives = tmp_path / "archives"
    archives.mkdir()

    def _make(
        post_install_cmd: str = "",
        files: Optional[Dict[str, str]] = None,
        prefix: str = "template-java/",
        name: str = "java.zip",
    ) -> Path:
        contents = files if files is not None else template_files(post_install_cmd)
        return make_template_zip(archives, contents, prefix=prefix, name=name)

    return _make


@pytest.fixture
def project(monkeypatch, tmp_path: Path) -> Path:
    """An empty directory to initialize projects in, used as the cwd."""
    path = tmp_path / "project"
    path.mkdir()
    monkeypatch.chdir(path)
    return path
