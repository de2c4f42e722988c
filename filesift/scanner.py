from __future__ import annotations

import logging
from collections.abc import Collection, Iterator
from pathlib import Path

from filesift.models import FileEntry

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".venv",
        "__pycache__",
        "build",
        "dist",
        "node_modules",
    }
)


def _walk(
    root: Path,
    *,
    include_hidden: bool,
    excluded_dirs: Collection[str],
) -> Iterator[Path]:
    # Explicit stack, deep trees must not hit the recursion limit.
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            children = sorted(directory.iterdir(), key=lambda child: child.name)
        except OSError as exc:
            logger.warning("Skipping unreadable directory %s: %s", directory, exc)
            continue

        subdirectories: list[Path] = []
        for child in children:
            if not include_hidden and child.name.startswith("."):
                continue
            if child.is_dir() and not child.is_symlink():
                if child.name not in excluded_dirs:
                    subdirectories.append(child)
            elif child.is_file():
                yield child
        pending.extend(reversed(subdirectories))


def scan_project(
    root: Path,
    *,
    include_hidden: bool = False,
    excluded_dirs: Collection[str] = DEFAULT_EXCLUDED_DIRS,
) -> list[FileEntry]:
    """Collect the files below ``root`` as entries with ``/``-separated paths."""
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory")

    entries = [
        FileEntry(path=path.relative_to(root).as_posix(), name=path.name)
        for path in _walk(
            root,
            include_hidden=include_hidden,
            excluded_dirs=excluded_dirs,
        )
    ]
    logger.debug("Scanned %d files below %s", len(entries), root)
    return entries
