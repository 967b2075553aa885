"""Async filesystem primitives.

Thin coroutine wrappers over blocking ``os`` calls. Each call runs in the
default thread pool so operations issued together actually overlap.

Failures are the native ``OSError`` family (``FileNotFoundError``,
``PermissionError``, ...) and are never wrapped or retried here.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


async def stat_path(path: str | Path) -> os.stat_result:
    """Stat a path, following symlinks.

    Raises:
        FileNotFoundError: If the path (or a symlink's target) doesn't exist.
        OSError: For any other stat failure.
    """
    return await asyncio.to_thread(os.stat, path)


def _read(path: str | Path, encoding: str) -> str:
    with open(path, encoding=encoding, errors="replace") as f:
        return f.read()


async def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a whole file as text.

    Undecodable bytes become U+FFFD, so only I/O can make this fail.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the file can't be read (permissions, is a directory, ...).
    """
    return await asyncio.to_thread(_read, path, encoding)


async def list_dir(path: str | Path) -> list[str]:
    """List the entry names of a directory, sorted."""
    return sorted(await asyncio.to_thread(os.listdir, path))


async def make_dir(path: str | Path) -> None:
    """Create a single directory. The parent must already exist."""
    await asyncio.to_thread(os.mkdir, path)


async def ensure_directory(path: str | Path) -> Path:
    """Ensure a directory and all of its ancestors exist.

    Walks upward to the closest existing ancestor, then creates the missing
    levels top-down. An existing directory is left untouched.

    Args:
        path: Directory to create.

    Returns:
        The absolute directory path.

    Raises:
        OSError: If a level can't be created (e.g. an ancestor is a file).
    """
    target = Path(os.path.abspath(path))

    missing: list[Path] = []
    current = target
    while True:
        try:
            await stat_path(current)
            break
        except FileNotFoundError:
            missing.append(current)
            if current == current.parent:
                break
            current = current.parent

    for directory in reversed(missing):
        logger.debug(f"Creating directory {directory}")
        # Another writer may have created it meanwhile
        with contextlib.suppress(FileExistsError):
            await make_dir(directory)

    return target
