"""Protocol definitions for the collaborators of path handles.

Handles never call the operating system directly. They go through a
FileSystem implementation and, for structured files, a Codec. Designing to
these interfaces enables:
- Substitution of test doubles that count or fail calls
- Alternative serialization formats without touching handle code

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

import os
from typing import Any, Protocol, runtime_checkable

from typed_paths.types import DirEntry


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Implementations are synchronous; handles run them in worker threads.
    A missing entry must surface as FileNotFoundError, every other failure
    as the OSError the platform raised.
    """

    def stat(self, path: str) -> os.stat_result:
        """Return metadata, following symbolic links.

        Args:
            path: Path to inspect.

        Returns:
            The stat result.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def lstat(self, path: str) -> os.stat_result:
        """Return metadata without following symbolic links.

        Args:
            path: Path to inspect.

        Returns:
            The stat result.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def read_text(self, path: str, encoding: str) -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.
            encoding: Text encoding.

        Returns:
            File content as string.
        """
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read raw content from a file.

        Args:
            path: Path to the file.

        Returns:
            File content as bytes.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str) -> None:
        """Write text content to a file, truncating it.

        Args:
            path: Path to the file.
            content: Content to write.
            encoding: Text encoding.
        """
        ...

    def write_bytes(self, path: str, content: bytes) -> None:
        """Write raw content to a file, truncating it.

        Args:
            path: Path to the file.
            content: Content to write.
        """
        ...

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def unlink(self, path: str) -> None:
        """Remove a file.

        Args:
            path: Path to remove.
        """
        ...

    def rmtree(self, path: str) -> None:
        """Remove a directory tree.

        Args:
            path: Path to remove.
        """
        ...

    def remove_entry(self, path: str) -> None:
        """Remove a file or directory tree, ignoring a missing entry.

        Args:
            path: Path to remove.
        """
        ...

    def replace(self, src: str, dst: str) -> None:
        """Atomically rename src to dst, overwriting dst if allowed.

        Args:
            src: Current location.
            dst: New location.
        """
        ...

    def copy_file(self, src: str, dst: str) -> None:
        """Copy file content.

        Args:
            src: Source file.
            dst: Destination file.
        """
        ...

    def copytree(self, src: str, dst: str) -> None:
        """Copy a directory tree, merging into an existing destination.

        Args:
            src: Source directory.
            dst: Destination directory.
        """
        ...

    def scandir(self, path: str) -> list[DirEntry]:
        """List the immediate entries of a directory.

        Entry types describe the entry itself. A symbolic link reports
        neither is_file nor is_directory, so listings never descend into it.

        Args:
            path: Directory to scan.

        Returns:
            Entries in the order the platform yields them.
        """
        ...


@runtime_checkable
class Codec(Protocol):
    """Protocol for structured-data serialization."""

    def dumps(self, value: Any, pretty: bool) -> str:
        """Serialize a value to text.

        Args:
            value: Value to serialize.
            pretty: Use a multi-line, indented layout.

        Returns:
            Serialized text.
        """
        ...

    def loads(self, text: str) -> Any:
        """Deserialize text into a value.

        Args:
            text: Serialized text.

        Returns:
            The decoded value.

        Raises:
            DeserializationError: If the text cannot be parsed.
        """
        ...
