"""Shared fixtures for mimic-core tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def write_repo(root: Path, branch: str = "main", head: str = "abc123\n") -> Path:
    """Create a minimal .git layout (HEAD + branch ref) under root."""
    git_dir = root / ".git"
    ref = git_dir / "refs" / "heads" / branch
    ref.parent.mkdir(parents=True, exist_ok=True)
    (git_dir / "HEAD").write_text(f"ref: refs/heads/{branch}\n", encoding="utf-8")
    ref.write_text(head, encoding="utf-8")
    return root


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating repositories below tmp_path."""

    def _make(name: str = "repo", branch: str = "main", head: str = "abc123\n") -> Path:
        return write_repo(tmp_path / name, branch=branch, head=head)

    return _make


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Tree with a.txt, sub/b.txt and sub/c.log."""
    root = tmp_path / "tree"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("x", encoding="utf-8")
    (root / "sub" / "b.txt").write_text("y", encoding="utf-8")
    (root / "sub" / "c.log").write_text("z", encoding="utf-8")
    return root
