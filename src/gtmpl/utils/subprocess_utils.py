"""Subprocess utilities for running commands."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from .console import console


def run_inherited(command: List[str], cwd: Optional[Path] = None) -> int:
    """Run a command with the parent's stdout/stderr and wait for it.

    Returns the exit code. Raises OSError if the command cannot be launched.
    """
    process = subprocess.Popen(command, cwd=str(cwd) if cwd else None)
    return process.wait()


def run_checked(command: List[str], cwd: Optional[Path] = None) -> None:
    """Run a command capturing its output; raise CalledProcessError on failure."""
    console.print(f"Running: {' '.join(command)}", style="dim")
    try:
        subprocess.run(command, cwd=cwd, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        console.print(f"Command failed with exit code {e.returncode}", style="bold red")
        if e.stdout:
            console.print(f"stdout: {e.stdout}", style="bold yellow")
        if e.stderr:
            console.print(f"stderr: {e.stderr}", style="bold yellow")
        raise
