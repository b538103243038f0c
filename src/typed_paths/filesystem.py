"""Operating-system filesystem collaborator.

RealFileSystem wraps standard library os and shutil operations. Path
handles call it from worker threads, and tests swap it for a mock.
"""

from __future__ import annotations

import os
import shutil

from typed_paths.types import DirEntry


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def stat(self, path: str) -> os.stat_result:
        """Return metadata, following symbolic links."""
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        """Return metadata without following symbolic links."""
        return os.lstat(path)

    def read_text(self, path: str, encoding: str) -> str:
        """Read text content from a file."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    def read_bytes(self, path: str) -> bytes:
        """Read raw content from a file."""
        with open(path, "rb") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str) -> None:
        """Write text content to a file."""
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)

    def write_bytes(self, path: str, content: bytes) -> None:
        """Write raw content to a file."""
        with open(path, "wb") as f:
            f.write(content)

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        if parents:
            os.makedirs(path, exist_ok=exist_ok)
            return
        try:
            os.mkdir(path)
        except FileExistsError:
            if not (exist_ok and os.path.isdir(path)):
                raise

    def unlink(self, path: str) -> None:
        """Remove a file."""
        os.unlink(path)

    def rmtree(self, path: str) -> None:
        """Remove a directory tree."""
        shutil.rmtree(path)

    def remove_entry(self, path: str) -> None:
        """Remove a file or directory tree, ignoring a missing entry."""
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.unlink(path)
        except FileNotFoundError:
            pass

    def replace(self, src: str, dst: str) -> None:
        """Atomically rename src to dst."""
        os.replace(src, dst)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy file content."""
        shutil.copyfile(src, dst)

    def copytree(self, src: str, dst: str) -> None:
        """Copy a directory tree."""
        shutil.copytree(src, dst, dirs_exist_ok=True)

    def scandir(self, path: str) -> list[DirEntry]:
        """List the immediate entries of a directory without following links."""
        with os.scandir(path) as entries:
            return [
                DirEntry(
                    name=entry.name,
                    is_file=entry.is_file(follow_symlinks=False),
                    is_directory=entry.is_dir(follow_symlinks=False),
                )
                for entry in entries
            ]
