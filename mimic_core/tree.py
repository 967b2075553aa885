"""Recursive collection of file contents under a directory tree."""

from __future__ import annotations

import asyncio
import errno
import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from mimic_core.fs import list_dir
from mimic_core.fs import read_text
from mimic_core.fs import stat_path

logger = logging.getLogger(__name__)

ExtensionFilter = str | Iterable[str]

# Node kinds
FILE = "file"
DIRECTORY = "directory"
OTHER = "other"


def matches_extension(path: str | Path, extension: ExtensionFilter = "") -> bool:
    """Check a file's extension against a filter.

    The filter is one suffix or several. Empty strings are ignored, and a
    filter left empty matches every file. Otherwise the final suffix must end
    with one of the given strings (case-sensitive), so ``"txt"`` and
    ``".txt"`` both match ``notes.txt``.
    """
    candidates = (extension,) if isinstance(extension, str) else tuple(extension)
    suffixes = tuple(s for s in candidates if s)
    if not suffixes:
        return True
    suffix = Path(path).suffix
    return bool(suffix) and suffix.endswith(suffixes)


async def classify(path: Path) -> str:
    """Classify a path as FILE, DIRECTORY or OTHER.

    A dangling or looping symlink is OTHER rather than an error.

    Raises:
        FileNotFoundError: If nothing exists at ``path``.
        OSError: For any other stat failure.
    """
    try:
        st = await stat_path(path)
    except OSError as e:
        unresolvable = isinstance(e, FileNotFoundError) or e.errno == errno.ELOOP
        if unresolvable and await asyncio.to_thread(os.path.islink, path):
            return OTHER
        raise

    if stat.S_ISREG(st.st_mode):
        return FILE
    if stat.S_ISDIR(st.st_mode):
        return DIRECTORY
    return OTHER


async def _visit(path: Path, extension: ExtensionFilter) -> tuple[dict[Path, str], list[Path]]:
    """Visit one node: returns (collected files, children to visit next)."""
    kind = await classify(path)

    if kind == FILE:
        if matches_extension(path, extension):
            return {path: await read_text(path)}, []
        return {}, []

    if kind == DIRECTORY:
        return {}, [path / name for name in await list_dir(path)]

    return {}, []


async def collect_tree(path: str | Path, extension: ExtensionFilter = "") -> dict[Path, str]:
    """Collect the text of every matching file under ``path``.

    Walks the tree level by level. All nodes of a level are visited
    concurrently and joined before the next level starts; the first failure
    anywhere aborts the whole collection and nothing partial is returned.
    Special files (devices, sockets, dangling or looping symlinks) are skipped.

    Args:
        path: File or directory to collect. Relative paths are resolved
            against the current directory.
        extension: Extension filter, see :func:`matches_extension`.

    Returns:
        Mapping of absolute file path to file content. A single file yields
        at most one entry; an empty directory yields an empty mapping.

    Raises:
        FileNotFoundError: If ``path`` or a node vanishing mid-walk is missing.
        OSError: If any node can't be stat-ed, listed or read.
    """
    root = Path(os.path.abspath(path))
    collected: dict[Path, str] = {}
    frontier = [root]
    level = 0

    while frontier:
        logger.debug(f"Visiting {len(frontier)} node(s) at level {level} under {root}")
        visits = await asyncio.gather(*(_visit(node, extension) for node in frontier))

        frontier = []
        for found, children in visits:
            collected.update(found)
            frontier.extend(children)
        level += 1

    return collected
