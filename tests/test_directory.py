"""Tests for DirectoryHandle."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from typed_paths.config import PathSettings
from typed_paths.context import PathContext
from typed_paths.directory import DirectoryHandle
from typed_paths.file import FileHandle
from typed_paths.filesystem import RealFileSystem
from typed_paths.types import DirEntry, PathKind


def _names(entries: list) -> list[str]:
    return sorted(e.basename() for e in entries)


class TestExistence:
    """Tests for create, ensure and exists."""

    async def test_create_and_exists(self, tmp_path: Path, context: PathContext) -> None:
        """Test creating a directory."""
        d = DirectoryHandle(tmp_path / "test-dir", context=context)
        assert await d.exists() is False
        await d.create()
        assert await d.exists() is True
        assert await d.is_directory() is True
        assert await d.is_file() is False

    async def test_ensure_is_idempotent(self, tmp_path: Path, context: PathContext) -> None:
        """Test ensure creates nested directories once."""
        d = DirectoryHandle(tmp_path / "new" / "deep" / "dir", context=context)
        await d.ensure()
        assert await d.exists()
        await d.ensure()
        assert await d.exists()

    async def test_create_non_recursive_existing_fails(
        self, tmp_path: Path, context: PathContext
    ) -> None:
        """Test a non-recursive create surfaces already-exists."""
        d = DirectoryHandle(tmp_path, context=context)
        with pytest.raises(FileExistsError):
            await d.create(recursive=False)

    async def test_create_recursive_existing_ok(
        self, tmp_path: Path, context: PathContext
    ) -> None:
        """Test a recursive create tolerates an existing directory."""
        await DirectoryHandle(tmp_path, context=context).create()

    async def test_exists_false_for_file(self, tmp_path: Path, context: PathContext) -> None:
        """Test exists distinguishes a directory from a file."""
        (tmp_path / "f.txt").write_text("x")
        assert await DirectoryHandle(tmp_path / "f.txt", context=context).exists() is False


class TestShallowListing:
    """Tests for single-level listings."""

    @pytest.fixture
    def listed(self, tmp_path: Path, context: PathContext) -> DirectoryHandle:
        """Directory with two files and one subdirectory."""
        root = tmp_path / "list-dir"
        (root / "sub-dir").mkdir(parents=True)
        (root / "file1.txt").touch()
        (root / "file2.txt").touch()
        return DirectoryHandle(root, context=context)

    async def test_list_files(self, listed: DirectoryHandle) -> None:
        """Test listing files only."""
        files = await listed.list_files()
        assert _names(files) == ["file1.txt", "file2.txt"]
        assert all(isinstance(f, FileHandle) for f in files)

    async def test_list_directories(self, listed: DirectoryHandle) -> None:
        """Test listing subdirectories only."""
        dirs = await listed.list_directories()
        assert _names(dirs) == ["sub-dir"]
        assert isinstance(dirs[0], DirectoryHandle)

    async def test_list(self, listed: DirectoryHandle) -> None:
        """Test listing everything."""
        entries = await listed.list()
        assert _names(entries) == ["file1.txt", "file2.txt", "sub-dir"]

    async def test_entries_inherit_context(self, listed: DirectoryHandle) -> None:
        """Test listed handles carry the parent's context."""
        for entry in await listed.list():
            assert entry.context is listed.context

    async def test_list_missing_raises(self, tmp_path: Path, context: PathContext) -> None:
        """Test listing a missing directory propagates NotFound."""
        with pytest.raises(FileNotFoundError):
            await DirectoryHandle(tmp_path / "nope", context=context).list()

    async def test_list_skips_other_entries(self, mock_context: PathContext, mock_filesystem: MagicMock) -> None:
        """Test entries that are neither files nor directories are skipped."""
        mock_filesystem.scandir.return_value = [
            DirEntry(name="a.txt", is_file=True, is_directory=False),
            DirEntry(name="sock", is_file=False, is_directory=False),
        ]
        entries = await DirectoryHandle("/d", context=mock_context).list()
        assert _names(entries) == ["a.txt"]


class TestDeepListing:
    """Tests for recursive listings on root/f1.txt, root/sub/f2.txt, root/sub/subsub/."""

    async def test_list_files_deep(self, deep_tree: DirectoryHandle) -> None:
        """Test every file below the root is found."""
        files = await deep_tree.list_files_deep()
        assert _names(files) == ["f1.txt", "f2.txt"]

    async def test_list_directories_deep(self, deep_tree: DirectoryHandle) -> None:
        """Test every directory below the root is found."""
        dirs = await deep_tree.list_directories_deep()
        assert _names(dirs) == ["sub", "subsub"]

    async def test_list_deep(self, deep_tree: DirectoryHandle) -> None:
        """Test files come before directories in the combined listing."""
        entries = await deep_tree.list_deep()
        assert len(entries) == 4
        assert [e.kind for e in entries] == [
            PathKind.FILE,
            PathKind.FILE,
            PathKind.DIRECTORY,
            PathKind.DIRECTORY,
        ]

    async def test_directory_precedes_descendants(self, deep_tree: DirectoryHandle) -> None:
        """Test a directory appears before its own subdirectories."""
        dirs = [d.basename() for d in await deep_tree.list_directories_deep()]
        assert dirs.index("sub") < dirs.index("subsub")

    async def test_deep_paths_are_full(self, deep_tree: DirectoryHandle) -> None:
        """Test nested handles carry full paths."""
        files = {f.basename(): f.path for f in await deep_tree.list_files_deep()}
        assert files["f2.txt"] == os.path.join(deep_tree.path, "sub", "f2.txt")

    async def test_bounded_scans(self, deep_tree: DirectoryHandle, tmp_path: Path) -> None:
        """Test a concurrency cap gives the same result."""
        bounded = PathContext(
            settings=PathSettings(max_concurrent_scans=1), filesystem=RealFileSystem()
        )
        root = DirectoryHandle(deep_tree.path, context=bounded)
        assert len(await root.list_deep()) == 4

    async def test_wide_tree(self, tmp_path: Path, context: PathContext) -> None:
        """Test many sibling subtrees are all collected."""
        root = tmp_path / "wide"
        for i in range(20):
            (root / f"d{i}" / "inner").mkdir(parents=True)
            (root / f"d{i}" / "inner" / "leaf.txt").touch()
        handle = DirectoryHandle(root, context=context)
        assert len(await handle.list_files_deep()) == 20
        assert len(await handle.list_directories_deep()) == 40


class TestWalk:
    """Tests for depth-first walking."""

    async def test_walk_visits_every_entry(self, walk_tree: DirectoryHandle) -> None:
        """Test walk visits f1.txt, sub and f2.txt exactly once."""
        walked: list[str] = []

        async def visit(item) -> None:
            walked.append(item.basename())

        await walk_tree.walk(visit)
        assert sorted(walked) == ["f1.txt", "f2.txt", "sub"]

    async def test_walk_parent_before_children(self, walk_tree: DirectoryHandle) -> None:
        """Test a directory is visited before its contents."""
        walked: list[str] = []
        await walk_tree.walk(lambda item: walked.append(item.basename()))
        assert walked.index("sub") < walked.index("f2.txt")

    async def test_walk_descends_after_visitor_returns(
        self, walk_tree: DirectoryHandle
    ) -> None:
        """Test entries created by the visitor in a subdirectory are seen."""
        walked: list[str] = []

        async def visit(item) -> None:
            walked.append(item.basename())
            if item.basename() == "sub":
                await asyncio.sleep(0)
                Path(item.path, "late.txt").write_text("late")

        await walk_tree.walk(visit)
        assert "late.txt" in walked

    async def test_walk_propagates_visitor_errors(self, walk_tree: DirectoryHandle) -> None:
        """Test a failing visitor stops the walk."""

        def visit(item) -> None:
            raise RuntimeError("stop")

        with pytest.raises(RuntimeError, match="stop"):
            await walk_tree.walk(visit)

    async def test_iter_deep(self, deep_tree: DirectoryHandle) -> None:
        """Test async iteration yields every entry."""
        seen = [item.basename() async for item in deep_tree.iter_deep()]
        assert sorted(seen) == ["f1.txt", "f2.txt", "sub", "subsub"]


class TestSymbolicLinks:
    """Tests for listings over trees holding symbolic links."""

    async def test_list_skips_links(self, linked_tree: DirectoryHandle) -> None:
        """Test links to files are neither files nor directories."""
        entries = await linked_tree.list()
        assert _names(entries) == ["f1.txt", "sub"]

    async def test_list_files_skips_file_link(self, linked_tree: DirectoryHandle) -> None:
        """Test a link to a file is not listed as a file."""
        assert _names(await linked_tree.list_files()) == ["f1.txt"]

    async def test_list_directories_skips_directory_link(
        self, linked_tree: DirectoryHandle
    ) -> None:
        """Test a link to a directory is not listed as a directory."""
        sub = linked_tree.join("sub").cast(PathKind.DIRECTORY)
        assert await sub.list_directories() == []

    async def test_list_deep_does_not_follow_loop(self, linked_tree: DirectoryHandle) -> None:
        """Test a link back to the root does not make deep listing recurse."""
        files = await linked_tree.list_files_deep()
        directories = await linked_tree.list_directories_deep()
        assert _names(files) == ["f1.txt"]
        assert _names(directories) == ["sub"]
        assert len(await linked_tree.list_deep()) == 2

    async def test_walk_does_not_follow_loop(self, linked_tree: DirectoryHandle) -> None:
        """Test walk finishes and skips both links."""
        walked: list[str] = []
        await linked_tree.walk(lambda item: walked.append(item.basename()))
        assert sorted(walked) == ["f1.txt", "sub"]

    async def test_iter_deep_does_not_follow_loop(self, linked_tree: DirectoryHandle) -> None:
        """Test async iteration finishes on a looped tree."""
        seen = [item.basename() async for item in linked_tree.iter_deep()]
        assert sorted(seen) == ["f1.txt", "sub"]

    async def test_link_target_still_reachable_by_cast(
        self, linked_tree: DirectoryHandle
    ) -> None:
        """Test a skipped link can still be used through an explicit handle."""
        link = linked_tree.join("f1-link").cast(PathKind.FILE)
        assert await link.read() == "one"


class TestClear:
    """Tests for clearing a directory."""

    async def test_clear_keeps_directory(self, tmp_path: Path, context: PathContext) -> None:
        """Test clear removes all children but not the directory."""
        root = tmp_path / "to-empty"
        (root / "sub-dir" / "nested").mkdir(parents=True)
        (root / "file1.txt").touch()
        (root / "sub-dir" / "nested" / "deep.txt").touch()
        d = DirectoryHandle(root, context=context)
        assert len(await d.list()) == 2

        await d.clear()

        assert await d.exists()
        assert await d.list() == []

    async def test_clear_empty_directory(self, tmp_path: Path, context: PathContext) -> None:
        """Test clearing an already empty directory."""
        d = DirectoryHandle(tmp_path, context=context)
        await d.clear()
        assert await d.list() == []

    async def test_clear_attempts_all_children(
        self, mock_context: PathContext, mock_filesystem: MagicMock
    ) -> None:
        """Test one failing removal does not stop the others."""
        mock_filesystem.scandir.return_value = [
            DirEntry(name="a", is_file=True, is_directory=False),
            DirEntry(name="b", is_file=True, is_directory=False),
            DirEntry(name="c", is_file=False, is_directory=True),
        ]

        def remove_entry(path: str) -> None:
            if path.endswith("b"):
                raise PermissionError(path)

        mock_filesystem.remove_entry.side_effect = remove_entry

        with pytest.raises(PermissionError):
            await DirectoryHandle("/d", context=mock_context).clear()
        assert mock_filesystem.remove_entry.call_count == 3


class TestRelocation:
    """Tests for remove, copy, move and rename."""

    async def test_remove_recursive(self, deep_tree: DirectoryHandle) -> None:
        """Test remove deletes the whole tree."""
        await deep_tree.remove()
        assert await deep_tree.exists() is False
        assert not os.path.exists(deep_tree.path)

    async def test_remove_missing_raises(self, tmp_path: Path, context: PathContext) -> None:
        """Test removing a missing directory propagates NotFound."""
        with pytest.raises(FileNotFoundError):
            await DirectoryHandle(tmp_path / "missing", context=context).remove()

    async def test_copy_to(
        self, deep_tree: DirectoryHandle, tmp_path: Path, context: PathContext
    ) -> None:
        """Test a recursive copy leaves the source in place."""
        result = await deep_tree.copy_to(tmp_path / "copy")
        assert result is deep_tree
        assert await deep_tree.exists()
        copy = DirectoryHandle(tmp_path / "copy", context=context)
        assert len(await copy.list_deep()) == 4
        assert (tmp_path / "copy" / "sub" / "f2.txt").read_text() == "two"

    async def test_copy_into_existing(
        self, deep_tree: DirectoryHandle, tmp_path: Path
    ) -> None:
        """Test copying merges into an existing target."""
        (tmp_path / "existing").mkdir()
        (tmp_path / "existing" / "keep.txt").touch()
        await deep_tree.copy_to(tmp_path / "existing")
        assert (tmp_path / "existing" / "keep.txt").exists()
        assert (tmp_path / "existing" / "f1.txt").exists()

    async def test_move_to(self, deep_tree: DirectoryHandle, tmp_path: Path) -> None:
        """Test a modifying move relocates the tree and the handle."""
        target = tmp_path / "moved"
        await deep_tree.move_to(target)
        assert deep_tree.path == str(target)
        assert len(await deep_tree.list_files_deep()) == 2
        assert not (tmp_path / "root").exists()

    async def test_move_to_non_modifying(
        self, deep_tree: DirectoryHandle, tmp_path: Path
    ) -> None:
        """Test a non-modifying move leaves a stale handle."""
        await deep_tree.move_to(tmp_path / "moved", modifying=False)
        assert deep_tree.basename() == "root"
        assert await deep_tree.exists() is False

    async def test_rename_to(self, deep_tree: DirectoryHandle, tmp_path: Path) -> None:
        """Test renaming within the parent directory."""
        await deep_tree.rename_to("renamed")
        assert deep_tree.basename() == "renamed"
        assert (tmp_path / "renamed" / "sub" / "f2.txt").is_file()

    async def test_stale_cache_after_rename(
        self, deep_tree: DirectoryHandle, tmp_path: Path
    ) -> None:
        """Test the cached record is dropped on rename."""
        assert await deep_tree.exists()
        await deep_tree.rename_to("renamed", modifying=False)
        assert await deep_tree.exists() is False
