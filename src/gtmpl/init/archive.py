"""Fetching and unpacking template archives."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import requests

from ..errors import DownloadOrExtractFailed

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60
CHUNK_SIZE = 8192


def _archive_name(url: str) -> str:
    name = PurePosixPath(unquote(urlparse(url).path)).name
    if not name:
        name = "template"
    if not name.endswith(".zip"):
        name += ".zip"
    return name


def download_file(url: str, dest_dir: Path) -> Path:
    """Download url into dest_dir and return the saved file path."""
    zip_path = dest_dir / _archive_name(url)
    logger.debug("Downloading %s to %s", url, zip_path)
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
            response.raise_for_status()
            with zip_path.open("wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        raise DownloadOrExtractFailed(f"Failed to download {url}: {e}") from e
    except OSError as e:
        raise DownloadOrExtractFailed(f"Failed to save {url} to {zip_path}: {e}") from e
    return zip_path


def unzip_local(archive: Path, dest_dir: Path) -> Path:
    """Extract a zip archive into dest_dir/<archive stem> and return that directory."""
    target = dest_dir / archive.stem
    try:
        with zipfile.ZipFile(archive, "r") as zf:
            root = target.resolve()
            for member in zf.namelist():
                resolved = (target / member).resolve()
                if resolved != root and root not in resolved.parents:
                    raise DownloadOrExtractFailed(
                        f"Refusing to extract {member}: it points outside {target}"
                    )
            target.mkdir(parents=True, exist_ok=True)
            zf.extractall(target)
    except zipfile.BadZipFile as e:
        raise DownloadOrExtractFailed(f"{archive} is not a valid zip archive: {e}") from e
    except OSError as e:
        raise DownloadOrExtractFailed(f"Failed to extract {archive}: {e}") from e
    logger.debug("Extracted %s to %s", archive, target)
    return target


def download_and_unzip(url: str, dest_dir: Path) -> Path:
    """Download a template archive and return the directory it was unpacked into."""
    archive = download_file(url, dest_dir)
    return unzip_local(archive, dest_dir)
