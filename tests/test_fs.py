"""Tests for async filesystem primitives."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest
from mimic_core.fs import ensure_directory
from mimic_core.fs import list_dir
from mimic_core.fs import make_dir
from mimic_core.fs import read_text
from mimic_core.fs import stat_path


class TestPrimitives:
    """Tests for stat_path, read_text, list_dir and make_dir."""

    @pytest.mark.asyncio
    async def test_stat_directory(self, tmp_path: Path) -> None:
        """Stat reports the node type."""
        assert stat.S_ISDIR((await stat_path(tmp_path)).st_mode)

    @pytest.mark.asyncio
    async def test_stat_missing(self, tmp_path: Path) -> None:
        """Missing paths raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await stat_path(tmp_path / "missing")

    @pytest.mark.asyncio
    async def test_read_text_unicode(self, tmp_path: Path) -> None:
        """Reads UTF-8 content."""
        path = tmp_path / "hello.txt"
        path.write_text("Hello 世界", encoding="utf-8")
        assert await read_text(path) == "Hello 世界"

    @pytest.mark.asyncio
    async def test_read_text_replaces_invalid_bytes(self, tmp_path: Path) -> None:
        """Undecodable bytes are replaced, not raised."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xffabc")
        assert await read_text(path) == "�abc"

    @pytest.mark.asyncio
    async def test_read_text_missing(self, tmp_path: Path) -> None:
        """Reading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await read_text(tmp_path / "missing.txt")

    @pytest.mark.asyncio
    async def test_list_dir_sorted(self, tmp_path: Path) -> None:
        """Entries come back sorted by name."""
        for name in ("b", "c", "a"):
            (tmp_path / name).write_text("")
        assert await list_dir(tmp_path) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_make_dir_requires_parent(self, tmp_path: Path) -> None:
        """make_dir creates exactly one level."""
        await make_dir(tmp_path / "one")
        assert (tmp_path / "one").is_dir()

        with pytest.raises(FileNotFoundError):
            await make_dir(tmp_path / "x" / "y")


class TestEnsureDirectory:
    """Tests for ensure_directory function."""

    @pytest.mark.asyncio
    async def test_creates_all_levels(self, tmp_path: Path) -> None:
        """Missing ancestors are created top-down."""
        target = tmp_path / "a" / "b" / "c"

        result = await ensure_directory(target)

        assert result == target
        assert target.is_dir()

    @pytest.mark.asyncio
    async def test_existing_directory_untouched(self, tmp_path: Path) -> None:
        """An existing directory and its contents are left alone."""
        (tmp_path / "keep.txt").write_text("keep")

        await ensure_directory(tmp_path)

        assert (tmp_path / "keep.txt").read_text() == "keep"

    @pytest.mark.asyncio
    async def test_relative_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative paths are created under the working directory."""
        monkeypatch.chdir(tmp_path)

        result = await ensure_directory("x/y")

        assert result == tmp_path / "x" / "y"
        assert result.is_dir()

    @pytest.mark.asyncio
    async def test_file_in_the_way(self, tmp_path: Path) -> None:
        """A file where a directory should be is an OSError."""
        (tmp_path / "file").write_text("")

        with pytest.raises(OSError):
            await ensure_directory(tmp_path / "file" / "sub")
