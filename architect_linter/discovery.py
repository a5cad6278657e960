"""Candidate file discovery."""

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

logger = structlog.get_logger()

DEFAULT_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts")
DEFAULT_EXCLUDE_DIRS = ("node_modules", "dist", ".git", "target", "build", "coverage")
DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


def is_candidate(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    """True for TypeScript sources, excluding declaration files."""
    name = path.name.lower()
    if name.endswith(DECLARATION_SUFFIXES):
        return False
    return path.suffix.lower() in tuple(extensions)


def collect_files(
    root: str | Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> list[Path]:
    """Recursively collect TypeScript files under ``root``, sorted.

    Excluded directories are pruned by name at any depth.
    """
    root = Path(root)
    extensions = tuple(e.lower() for e in extensions)
    excluded = set(exclude_dirs)

    if root.is_file():
        return [root] if is_candidate(root, extensions) else []

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for filename in filenames:
            path = Path(dirpath) / filename
            if is_candidate(path, extensions):
                files.append(path)

    files.sort()
    logger.debug("Collected files", root=str(root), files=len(files))
    return files
