"""Tests for Directory.create/exists/read/mkdir."""

import os
import stat
from pathlib import Path

import pytest

from superfs.fs.directory import Directory
from superfs.fs.entry import DirectoryEntry, FileEntry
from superfs.fs.errors import AccessError, NotFoundError
from superfs.fs.options import ReadOptions


def _relatives(entries) -> list:
    return [entry.relative for entry in entries]


class TestDirectoryBasics:
    """Tests for create/exists and construction."""

    def test_construction_does_not_touch_filesystem(self, tmp_path: Path) -> None:
        handle = Directory(tmp_path / "does-not-exist")

        assert handle.path == tmp_path / "does-not-exist"

    def test_relative_marker_uses_calling_module(self) -> None:
        assert Directory("..").path == Path(__file__).resolve().parent.parent

    def test_absolute_path_passes_through(self, tmp_path: Path) -> None:
        assert Directory(str(tmp_path)).path == tmp_path

    @pytest.mark.asyncio
    async def test_create(self, tree: Path) -> None:
        entry = await Directory(tree).create()

        assert isinstance(entry, DirectoryEntry)
        assert entry.is_dir is True
        assert entry.name == "root"
        assert entry.parent_dir == tree.parent
        assert entry.mode == os.lstat(tree).st_mode

    @pytest.mark.asyncio
    async def test_create_missing(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            await Directory(tmp_path / "missing").create()

    @pytest.mark.asyncio
    async def test_exists(self, tree: Path) -> None:
        assert await Directory(tree).exists() is True
        assert await Directory(tree / "missing").exists() is False


class TestDirectoryRead:
    """Tests for traversal."""

    @pytest.mark.asyncio
    async def test_non_recursive_counts(self, tree: Path) -> None:
        entries = await Directory(tree).read()

        dirs = [e for e in entries if e.is_dir]
        files = [e for e in entries if not e.is_dir]
        assert len(entries) == 4
        assert [e.name for e in dirs] == ["empty", "sub"]
        assert [e.name for e in files] == ["a.txt", "b.log"]
        assert all(isinstance(e, DirectoryEntry) for e in dirs)
        assert all(isinstance(e, FileEntry) for e in files)

    @pytest.mark.asyncio
    async def test_recursive_lists_everything_once_depth_first(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True)

        assert _relatives(entries) == [
            "a.txt",
            "b.log",
            "empty",
            "sub",
            "sub/c.txt",
            "sub/deep",
            "sub/deep/d.txt",
        ]
        for entry in entries:
            assert entry.path == tree / entry.relative

    @pytest.mark.asyncio
    async def test_example_scenario(self, simple_tree: Path) -> None:
        entries = await Directory(simple_tree).read(recursive=True, skip_dirs=True)

        assert _relatives(entries) == ["a.txt", "sub/b.txt"]

    @pytest.mark.asyncio
    async def test_skip_files(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True, skip_files=True)

        assert _relatives(entries) == ["empty", "sub", "sub/deep"]

    @pytest.mark.asyncio
    async def test_skip_dirs_still_descends(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True, skip_dirs=True)

        assert _relatives(entries) == ["a.txt", "b.log", "sub/c.txt", "sub/deep/d.txt"]

    @pytest.mark.asyncio
    async def test_add_parent(self, tree: Path) -> None:
        entries = await Directory(tree).read(add_parent=True, skip_files=True)

        assert entries[0].path == tree
        assert entries[0].relative is None
        assert _relatives(entries[1:]) == ["empty", "sub"]

    @pytest.mark.asyncio
    async def test_add_parent_not_repeated_for_children(self, tree: Path) -> None:
        entries = await Directory(tree).read(add_parent=True, recursive=True)

        assert [e.path for e in entries].count(tree) == 1
        assert sum(1 for e in entries if e.relative is None) == 1

    @pytest.mark.asyncio
    async def test_filter_on_files_uses_full_path(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True, skip_dirs=True, filter="*.txt")

        assert _relatives(entries) == ["a.txt", "sub/c.txt", "sub/deep/d.txt"]

    @pytest.mark.asyncio
    async def test_filter_on_dirs_uses_relative_path_and_still_recurses(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True, skip_files=True, filter="sub/*")

        # 'sub' itself fails the filter but is still descended into
        assert _relatives(entries) == ["sub/deep"]

    @pytest.mark.asyncio
    async def test_ignore_keeps_matching_names(self, tree: Path) -> None:
        entries = await Directory(tree).read(ignore="*.txt")

        # Polarity regression: names matching the ignore pattern are kept
        assert _relatives(entries) == ["a.txt"]

    @pytest.mark.asyncio
    async def test_ignore_second_pass_drops_matching_full_paths(self, tree: Path) -> None:
        entries = await Directory(tree).read(recursive=True, ignore=["sub", "c.txt", "*/sub/c.txt"])

        # First pass keeps 'sub' and 'c.txt' by name; the child result for
        # sub/c.txt is then dropped because its full path matches
        assert _relatives(entries) == ["sub"]

    @pytest.mark.asyncio
    async def test_encoding_is_stamped_on_files(self, tree: Path) -> None:
        entries = await Directory(tree).read(encoding="latin-1", skip_dirs=True)

        assert {e.encoding for e in entries} == {"latin-1"}

    @pytest.mark.asyncio
    async def test_encoding_defaults_to_config(self, tree: Path, default_config) -> None:
        default_config.read.encoding = "utf-16"

        entries = await Directory(tree).read(skip_dirs=True)

        assert {e.encoding for e in entries} == {"utf-16"}

    @pytest.mark.asyncio
    async def test_options_record_and_mapping(self, tree: Path) -> None:
        from_record = await Directory(tree).read(ReadOptions(recursive=True, skip_dirs=True))
        from_mapping = await Directory(tree).read({"recursive": True, "skip_dirs": True})

        assert _relatives(from_record) == _relatives(from_mapping)
        assert len(from_record) == 4

    @pytest.mark.asyncio
    async def test_unknown_option(self, tree: Path) -> None:
        with pytest.raises(TypeError):
            await Directory(tree).read(recurse=True)

    @pytest.mark.asyncio
    async def test_each_read_returns_fresh_list(self, tree: Path) -> None:
        handle = Directory(tree)

        first = await handle.read()
        second = await handle.read()

        assert first is not second
        assert _relatives(first) == _relatives(second)

    @pytest.mark.asyncio
    async def test_read_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            await Directory(tmp_path / "missing").read()

    @pytest.mark.asyncio
    async def test_read_file_path_raises_access_error(self, tree: Path) -> None:
        with pytest.raises(AccessError):
            await Directory(tree / "a.txt").read()

    @pytest.mark.asyncio
    async def test_symlinked_directory_is_listed_but_not_descended(self, tree: Path) -> None:
        (tree / "link").symlink_to(tree / "sub", target_is_directory=True)

        entries = await Directory(tree).read(recursive=True)

        link = next(e for e in entries if e.relative == "link")
        assert isinstance(link, DirectoryEntry)
        assert link.is_link is True
        assert not any(e.relative.startswith("link/") for e in entries)


class TestDirectoryMkdir:
    """Tests for mkdir."""

    @pytest.mark.asyncio
    async def test_creates_missing_ancestors(self, tmp_path: Path) -> None:
        target = tmp_path / "x" / "y" / "z"

        created = await Directory(tmp_path).mkdir(target)

        assert target.is_dir()
        assert created == [tmp_path / "x", tmp_path / "x" / "y", target]

    @pytest.mark.asyncio
    async def test_existing_ancestors_untouched(self, tmp_path: Path) -> None:
        existing = tmp_path / "keep"
        existing.mkdir(mode=0o755)
        os.chmod(existing, 0o700)

        created = await Directory(tmp_path).mkdir(existing / "new", mode=0o755)

        assert created == [existing / "new"]
        assert stat.S_IMODE(existing.stat().st_mode) == 0o700

    @pytest.mark.asyncio
    async def test_existing_target_is_noop(self, tmp_path: Path) -> None:
        assert await Directory(tmp_path).mkdir(tmp_path) == []
