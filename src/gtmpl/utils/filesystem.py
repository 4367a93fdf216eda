"""File system utilities."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Set


def iter_files(directory: Path) -> List[Path]:
    """Return every file under directory, relative to it, in sorted order."""
    return sorted(
        path.relative_to(directory) for path in directory.rglob("*") if path.is_file()
    )


def mirror_dir(src: Path, dst: Path, skip: Optional[Iterable[str]] = None) -> List[str]:
    """Copy every file under src into dst, keeping the directory structure.

    Existing files are overwritten. Returns the relative (posix) paths that
    were copied, in copy order.
    """
    skipped: Set[str] = set(skip or ())
    copied: List[str] = []
    for relative in iter_files(src):
        key = relative.as_posix()
        if key in skipped:
            continue
        target = dst / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src / relative, target)
        copied.append(key)
    return copied


def append_to_file(target: Path, source: Path) -> None:
    """Append the contents of source to target, on a new line."""
    if not source.exists():
        return
    addition = source.read_text(encoding="utf-8")
    existing = target.read_text(encoding="utf-8") if target.exists() else ""
    with target.open("a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            f.write("\n")
        f.write(addition)


def remove(path: Path) -> None:
    """Remove a file or directory tree if it exists."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def top_level_segments(paths: Iterable[str]) -> List[str]:
    """Return the distinct first path segments of relative posix paths, in order."""
    seen: List[str] = []
    for path in paths:
        head = path.split("/", 1)[0]
        if head and head not in seen:
            seen.append(head)
    return seen
