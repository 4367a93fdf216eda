"""Create a Gauge project from a template.

Initialization always targets ``InitContext.project_root``. The steps are:

1. refuse to run inside an existing Gauge project
2. resolve the template (by name, URL or local zip)
3. download/extract it into a temporary directory
4. mirror the directory holding ``manifest.json`` into the project
5. run the template's post install command, rolling back the copied
   files if it fails
6. install the language runner if it is missing (best effort)
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import urlparse

from ..config import Settings, allow_insecure_download
from ..errors import (
    AlreadyAProject,
    DownloadOrExtractFailed,
    IOFailure,
    InsecureDownloadRejected,
    InvalidTemplateLocation,
    MalformedTemplate,
    PostInstallFailed,
    TemplateNotFound,
    UnknownTemplate,
)
from ..manifest import (
    MANIFEST_FILE,
    METADATA_FILE,
    TemplateMetadata,
    is_gauge_project,
    project_manifest,
    read_metadata,
)
from ..plugins import install_runner, is_runner_installed
from ..templates import get_template
from ..utils import (
    append_to_file,
    console,
    mirror_dir,
    remove,
    run_inherited,
    top_level_segments,
)
from .archive import download_and_unzip, unzip_local

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"
HTTPS = "https"


@dataclass
class InitContext:
    """Everything an initialization needs, passed explicitly."""

    project_root: Path
    home: Path
    settings: Settings
    silent: bool = False
    download: Callable[[str, Path], Path] = download_and_unzip
    unzip: Callable[[Path, Path], Path] = unzip_local
    run_command: Callable[[List[str], Path], int] = run_inherited
    runner_installed: Callable[[str, Path], bool] = is_runner_installed
    install: Callable[[str, Settings, bool], None] = install_runner


def validate_directory(ctx: InitContext) -> None:
    if is_gauge_project(ctx.project_root):
        raise AlreadyAProject(
            "This is already a Gauge Project. Please try to initialize a Gauge project in a different location."
        )


def check_url(template_url: str, settings: Settings) -> None:
    """Reject malformed URLs, and insecure ones unless they are allowed."""
    try:
        parsed = urlparse(template_url)
    except ValueError:
        parsed = None
    if parsed is None or not parsed.scheme or not parsed.netloc:
        raise InvalidTemplateLocation(
            f"Failed to parse template URL '{template_url}'. The template location must be a valid (https) URI"
        )
    if parsed.scheme.lower() != HTTPS and not allow_insecure_download(settings):
        raise InsecureDownloadRejected(
            f"The url '{template_url}' in not secure and 'allow_insecure_download' is set to false.\n"
            "To allow insecure downloads set 'allow_insecure_download' configuration to true.\n"
            "Run 'gtmpl config allow_insecure_download true' to the same."
        )


def get_template_dir(unzipped_template: Path) -> Optional[Path]:
    """Find the directory holding manifest.json inside an extracted template.

    When several directories qualify, the shallowest wins and ties go to the
    lexicographically smallest relative path.
    """
    candidates = [unzipped_template]
    candidates.extend(sorted(p for p in unzipped_template.rglob("*") if p.is_dir()))
    found = [c for c in candidates if (c / MANIFEST_FILE).is_file()]
    if not found:
        return None
    return min(
        found,
        key=lambda p: (
            len(p.relative_to(unzipped_template).parts),
            p.relative_to(unzipped_template).as_posix(),
        ),
    )


def rollback(
    project_root: Path, files_added: List[str], gitignore_before: Optional[str] = None
) -> List[str]:
    """Remove the top-level entries created by a copy, except the metadata file.

    A .gitignore that existed before the copy gets its earlier contents back.
    """
    removed: List[str] = []
    if gitignore_before is not None:
        (project_root / GITIGNORE_FILE).write_text(gitignore_before, encoding="utf-8")
    for segment in top_level_segments(files_added):
        if segment == METADATA_FILE:
            continue
        remove(project_root / segment)
        removed.append(segment)
    return removed


def run_post_install(
    metadata: TemplateMetadata,
    files_added: List[str],
    ctx: InitContext,
    gitignore_before: Optional[str] = None,
) -> None:
    command = metadata.post_install_cmd.split()
    if not command:
        return
    logger.debug("Running post install command %s", metadata.post_install_cmd)
    try:
        code = ctx.run_command(command, ctx.project_root)
        error = f"exit status {code}" if code else ""
    except OSError as e:
        error = str(e)
    if error:
        removed = rollback(ctx.project_root, files_added, gitignore_before)
        logger.debug("Rolled back %s", removed)
        raise PostInstallFailed(f"Failed to run post install commands: {error}")


def copy_template_contents(unzipped_template: Path, ctx: InitContext) -> TemplateMetadata:
    """Copy an extracted template into the project and run its post install step."""
    wd = ctx.project_root
    template_dir = get_template_dir(unzipped_template)
    if template_dir is None:
        raise MalformedTemplate(
            f"failed to copy template. The dir {unzipped_template} does not contain required files. "
            f"No {MANIFEST_FILE} found"
        )

    skip: List[str] = []
    gitignore_before: Optional[str] = None
    project_gitignore = wd / GITIGNORE_FILE
    if project_gitignore.exists():
        gitignore_before = project_gitignore.read_text(encoding="utf-8")
        append_to_file(project_gitignore, template_dir / GITIGNORE_FILE)
        skip.append(GITIGNORE_FILE)

    console.print(f"Copying Gauge template {template_dir.name} to current directory ...")
    try:
        files_added = mirror_dir(template_dir, wd, skip=skip)
    except OSError as e:
        raise IOFailure(f"Failed to copy Gauge template: {e}") from e

    metadata = read_metadata(wd / METADATA_FILE)
    run_post_install(metadata, files_added, ctx, gitignore_before)

    console.print(
        f"Successfully initialized the project. {metadata.post_install_msg}".rstrip(),
        style="green",
    )
    remove(wd / METADATA_FILE)
    return metadata


def initialize_template(template_url: str, ctx: InitContext) -> TemplateMetadata:
    with tempfile.TemporaryDirectory(prefix="gtmpl-") as temp_dir:
        console.print(f"Initializing template from {template_url}")
        try:
            unzipped = ctx.download(template_url, Path(temp_dir))
        except DownloadOrExtractFailed as e:
            raise DownloadOrExtractFailed(
                f"{e}. Please make sure that this is a valid Gauge template URI or there are no problems with the network connection"
            ) from e
        return copy_template_contents(unzipped, ctx)


def install_runner_if_missing(ctx: InitContext) -> None:
    """Install the project's language runner; failures are only logged."""
    try:
        manifest = project_manifest(ctx.project_root)
    except (OSError, ValueError) as e:
        logger.error("failed to install language runner. %s", e)
        return
    language = manifest.language
    if not language or ctx.runner_installed(language, ctx.home):
        return
    console.print(
        f"Compatible language plugin {language} is not installed. Installing plugin..."
    )
    try:
        ctx.install(language, ctx.settings, ctx.silent)
    except Exception as e:  # best effort, never fails the init
        logger.error("failed to install language runner %s. %s", language, e)


def from_template(template_name: str, ctx: InitContext) -> TemplateMetadata:
    """Initialize a project from a named template."""
    validate_directory(ctx)
    try:
        template_url = get_template(template_name, ctx.home)
    except TemplateNotFound as e:
        raise UnknownTemplate(e) from e
    check_url(template_url, ctx.settings)
    metadata = initialize_template(template_url, ctx)
    install_runner_if_missing(ctx)
    return metadata


def from_url(template_url: str, ctx: InitContext) -> TemplateMetadata:
    """Initialize a project from a template archive URL."""
    validate_directory(ctx)
    check_url(template_url, ctx.settings)
    metadata = initialize_template(template_url, ctx)
    install_runner_if_missing(ctx)
    return metadata


def from_zip_file(template_file: Path, ctx: InitContext) -> TemplateMetadata:
    """Initialize a project from a local template zip."""
    validate_directory(ctx)
    with tempfile.TemporaryDirectory(prefix="gtmpl-") as temp_dir:
        unzipped = ctx.unzip(template_file, Path(temp_dir))
        metadata = copy_template_contents(unzipped, ctx)
    install_runner_if_missing(ctx)
    return metadata
