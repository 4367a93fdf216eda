"""Utility modules for gtmpl."""

from .console import console, err_console
from .filesystem import append_to_file, mirror_dir, remove, top_level_segments
from .subprocess_utils import run_checked, run_inherited

__all__ = [
    "append_to_file",
    "console",
    "err_console",
    "mirror_dir",
    "remove",
    "run_checked",
    "run_inherited",
    "top_level_segments",
]
