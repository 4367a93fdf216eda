"""Language runner plugin checks."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings
from .utils import console, run_checked

logger = logging.getLogger(__name__)


def plugins_dir(home: Path) -> Path:
    return home / "plugins"


def is_runner_installed(language: str, home: Path) -> bool:
    """True when a runner plugin for language is present under the gtmpl home."""
    path = plugins_dir(home) / language
    return path.is_dir() and any(path.iterdir())


def install_runner(language: str, settings: Settings, silent: bool = False) -> None:
    """Install the runner plugin for a language using the configured command.

    Raises CalledProcessError or OSError when installation fails.
    """
    command = settings["plugin_install_command"].format(language=language).split()
    if not silent:
        console.print(f"Installing plugin {language} ...")
    logger.debug("Installing runner with %s", command)
    run_checked(command)
    if not silent:
        console.print(f"✓ Plugin {language} installed", style="green")
