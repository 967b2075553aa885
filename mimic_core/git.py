"""Git repository detection.

Finds the enclosing repository by walking parent directories, then reads
the checked-out branch and its ref straight from the metadata files. No
``git`` executable is involved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mimic_core.exceptions import MalformedMetadataError
from mimic_core.exceptions import RepositoryNotFoundError
from mimic_core.fs import read_text
from mimic_core.fs import stat_path

logger = logging.getLogger(__name__)

GIT_DIR = ".git"
HEAD_REF_PREFIX = "ref: refs/heads/"
MAX_SEARCH_DEPTH = 10


@dataclass(frozen=True)
class RepoMetadata:
    """Snapshot of a detected repository."""

    root: Path  # directory holding the marker
    branch: str  # checked-out branch name
    head: str  # raw ref record content, trailing newline included

    @property
    def commit(self) -> str:
        """Ref value without surrounding whitespace."""
        return self.head.strip()


def parse_head_ref(content: str, path: Path | None = None) -> str:
    """Extract the branch name from a HEAD pointer record.

    Expects ``"ref: refs/heads/<branch>\\n"``. One trailing newline is
    removed; a detached HEAD (bare commit id) or any other shape is rejected.

    Args:
        content: Raw HEAD file content.
        path: Record path, reported in the error.

    Returns:
        Branch name (may contain slashes, e.g. ``feat/x``).

    Raises:
        MalformedMetadataError: If the content does not name a branch.
    """
    line = content.removesuffix("\n")
    if not line.startswith(HEAD_REF_PREFIX):
        raise MalformedMetadataError(
            f"HEAD does not point to a branch: {content!r}",
            path=path,
            content=content,
        )
    branch = line[len(HEAD_REF_PREFIX) :]
    if not branch:
        raise MalformedMetadataError(f"HEAD names an empty branch: {content!r}", path=path, content=content)
    return branch


async def read_metadata(root: str | Path, marker: str = GIT_DIR) -> RepoMetadata:
    """Read branch and head of the repository rooted at ``root``.

    The two reads are sequential: the second path depends on the branch
    found by the first. Read failures propagate unmodified.

    Raises:
        FileNotFoundError: If HEAD or the branch ref record is missing.
        OSError: If either record can't be read.
        MalformedMetadataError: If HEAD does not name a branch.
    """
    root = Path(root)
    head_path = root / marker / "HEAD"
    branch = parse_head_ref(await read_text(head_path), head_path)

    head = await read_text(root / marker / "refs" / "heads" / branch)
    return RepoMetadata(root=root, branch=branch, head=head)


async def _has_marker(directory: Path, marker: str) -> bool:
    try:
        await stat_path(directory / marker)
    except OSError:
        # Permission problems count as absence at this layer
        return False
    return True


async def detect_repository(
    start: str | Path,
    *,
    max_depth: int = MAX_SEARCH_DEPTH,
    marker: str = GIT_DIR,
    inclusive: bool = False,
) -> RepoMetadata:
    """Detect the repository enclosing ``start``.

    The first candidate is the parent of ``start`` (pass a file inside the
    project, or a directory below its root). Each step probes one more
    ancestor, strictly one after the other, so a hit close to ``start``
    never pays for deeper probes.

    Args:
        start: File or directory the search begins above.
        max_depth: Maximum number of directories probed.
        marker: Name of the metadata directory.
        inclusive: Probe ``start`` itself first.

    Returns:
        Metadata of the first repository found.

    Raises:
        RepositoryNotFoundError: If the filesystem root or ``max_depth`` is
            reached without finding a marker.
        MalformedMetadataError: If the repository's HEAD does not name a branch.
        OSError: If the repository's metadata can't be read.
    """
    start_path = Path(os.path.abspath(start))
    if inclusive:
        previous, candidate = None, start_path
    else:
        previous, candidate = start_path, start_path.parent
    depth = 0

    # The root is its own parent: once probed, the walk is over
    while depth < max_depth and candidate != previous:
        logger.debug(f"Probing {candidate / marker} (depth {depth})")
        if await _has_marker(candidate, marker):
            return await read_metadata(candidate, marker)
        previous, candidate = candidate, candidate.parent
        depth += 1

    raise RepositoryNotFoundError(
        f"No {marker} directory found above {start_path} ({depth} level(s) searched)",
        start=start_path,
        probes=depth,
    )
