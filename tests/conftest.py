"""Shared test fixtures."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from typed_paths.config import PathSettings
from typed_paths.context import PathContext
from typed_paths.directory import DirectoryHandle
from typed_paths.filesystem import RealFileSystem


def make_stat_result(size: int = 0, is_dir: bool = False) -> os.stat_result:
    """Build an os.stat_result for a regular file or directory."""
    mode = (stat.S_IFDIR if is_dir else stat.S_IFREG) | 0o644
    stamp = 1_700_000_000
    return os.stat_result(
        (mode, 0, 0, 1, 0, 0, size, stamp, stamp, stamp, float(stamp), float(stamp), float(stamp))
    )


@pytest.fixture
def settings(tmp_path: Path) -> PathSettings:
    """Settings rooting temporary directories inside tmp_path."""
    return PathSettings(temp_root=tmp_path / "tmp-root")


@pytest.fixture
def context(settings: PathSettings) -> PathContext:
    """Context backed by the real filesystem."""
    return PathContext(settings=settings, filesystem=RealFileSystem())


# ============================================================================
# Mock FileSystem Fixtures
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    By default every path stats as a 12-byte regular file.
    """
    fs = MagicMock()
    fs.stat.return_value = make_stat_result(size=12)
    fs.lstat.return_value = make_stat_result(size=12)
    fs.read_text.return_value = "cached text"
    fs.read_bytes.return_value = b"raw bytes"
    fs.scandir.return_value = []
    return fs


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> PathContext:
    """Context backed by the mock filesystem."""
    return PathContext(settings=PathSettings(), filesystem=mock_filesystem)


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def deep_tree(tmp_path: Path, context: PathContext) -> DirectoryHandle:
    """Create root/f1.txt, root/sub/f2.txt and root/sub/subsub/."""
    root = tmp_path / "root"
    (root / "sub" / "subsub").mkdir(parents=True)
    (root / "f1.txt").write_text("one")
    (root / "sub" / "f2.txt").write_text("two")
    return DirectoryHandle(root, context=context)


@pytest.fixture
def walk_tree(tmp_path: Path, context: PathContext) -> DirectoryHandle:
    """Create root/f1.txt and root/sub/f2.txt."""
    root = tmp_path / "walk"
    (root / "sub").mkdir(parents=True)
    (root / "f1.txt").write_text("one")
    (root / "sub" / "f2.txt").write_text("two")
    return DirectoryHandle(root, context=context)


@pytest.fixture
def linked_tree(tmp_path: Path, context: PathContext) -> DirectoryHandle:
    """Create root/f1.txt and root/sub/ plus links root/f1-link -> f1.txt and root/sub/loop -> root."""
    root = tmp_path / "linked"
    (root / "sub").mkdir(parents=True)
    (root / "f1.txt").write_text("one")
    (root / "f1-link").symlink_to(root / "f1.txt")
    (root / "sub" / "loop").symlink_to(root, target_is_directory=True)
    return DirectoryHandle(root, context=context)


@pytest.fixture
def stat_result_factory():
    """Return the os.stat_result builder used by mock filesystem tests."""
    return make_stat_result
