"""Tests for the directory lister."""

from pathlib import Path

import pytest

from shotdiff.differ.listing import get_image_names
from shotdiff.errors import DirectoryNotFound, DirectoryReadError


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"")


class TestGetImageNames:

    @pytest.mark.asyncio
    async def test_default_extensions(self, tmp_path: Path):
        _touch(tmp_path, "a.jpg", "b.JPEG", "c.png", "d.gif", "notes.txt")
        assert await get_image_names(str(tmp_path)) == ["a.jpg", "b.JPEG", "c.png"]

    @pytest.mark.asyncio
    async def test_single_extension(self, tmp_path: Path):
        _touch(tmp_path, "a.jpg", "b.png", "c.PNG")
        assert await get_image_names(str(tmp_path), ".png") == ["b.png", "c.PNG"]

    @pytest.mark.asyncio
    async def test_extension_without_dot(self, tmp_path: Path):
        _touch(tmp_path, "a.gif", "b.png")
        assert await get_image_names(str(tmp_path), "gif") == ["a.gif"]

    @pytest.mark.asyncio
    async def test_extension_must_be_suffix(self, tmp_path: Path):
        _touch(tmp_path, "a.png.bak", "jpg", "b.jpgx")
        assert await get_image_names(str(tmp_path)) == []

    @pytest.mark.asyncio
    async def test_skips_directories(self, tmp_path: Path):
        _touch(tmp_path, "a.png")
        (tmp_path / "diff").mkdir()
        (tmp_path / "folder.png").mkdir()
        assert await get_image_names(str(tmp_path)) == ["a.png"]

    @pytest.mark.asyncio
    async def test_empty_directory(self, tmp_path: Path):
        assert await get_image_names(str(tmp_path)) == []

    @pytest.mark.asyncio
    async def test_sorted_output(self, tmp_path: Path):
        _touch(tmp_path, "c.png", "a.png", "b.png")
        assert await get_image_names(str(tmp_path)) == ["a.png", "b.png", "c.png"]

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(DirectoryNotFound):
            await get_image_names(str(tmp_path / "missing"))

    @pytest.mark.asyncio
    async def test_path_is_a_file(self, tmp_path: Path):
        path = tmp_path / "file.png"
        path.write_bytes(b"")
        with pytest.raises(DirectoryReadError):
            await get_image_names(str(path))
