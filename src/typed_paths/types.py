"""Shared data types for typed paths."""

from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DirEntry",
    "PathKind",
    "StatSnapshot",
    "TypeMismatchError",
    "check_cast",
]


class TypeMismatchError(TypeError):
    """Raised when a path is cast to an incompatible kind."""

    pass


class PathKind(str, Enum):
    """Capability set carried by a path handle."""

    GENERIC = "generic"
    FILE = "file"
    DIRECTORY = "directory"
    STRUCTURED = "structured"
    TEMPORARY = "temporary"


# (source kind, requested kind) pairs rejected by a checked cast
_INCOMPATIBLE_CASTS: frozenset[tuple[PathKind, PathKind]] = frozenset(
    {
        (PathKind.DIRECTORY, PathKind.FILE),
        (PathKind.TEMPORARY, PathKind.FILE),
        (PathKind.FILE, PathKind.DIRECTORY),
        (PathKind.FILE, PathKind.TEMPORARY),
        (PathKind.STRUCTURED, PathKind.DIRECTORY),
        (PathKind.STRUCTURED, PathKind.TEMPORARY),
    }
)

_KIND_LABELS = {
    PathKind.GENERIC: "Path",
    PathKind.FILE: "File",
    PathKind.DIRECTORY: "Directory",
    PathKind.STRUCTURED: "StructuredFile",
    PathKind.TEMPORARY: "TemporaryDirectory",
}


def check_cast(source: PathKind, target: PathKind) -> PathKind:
    """Validate a cast between two path kinds.

    Args:
        source: Kind of the handle being cast.
        target: Requested kind.

    Returns:
        The requested kind.

    Raises:
        TypeMismatchError: If the pair is in the incompatibility table.
    """
    if (source, target) in _INCOMPATIBLE_CASTS:
        raise TypeMismatchError(
            f"Cannot cast a {_KIND_LABELS[source]} to a {_KIND_LABELS[target]}"
        )
    return target


@dataclass(frozen=True)
class StatSnapshot:
    """Metadata captured from a single stat call.

    Attributes:
        size: Size in bytes.
        is_file: True for regular files.
        is_directory: True for directories.
        is_symlink: True for symbolic links (only from lstat).
        mode: Raw st_mode bits.
        atime: Last access time (seconds since epoch).
        mtime: Last modification time (seconds since epoch).
        ctime: Metadata change time (seconds since epoch).
    """

    size: int
    is_file: bool
    is_directory: bool
    is_symlink: bool
    mode: int
    atime: float
    mtime: float
    ctime: float

    @classmethod
    def from_stat_result(cls, result: os.stat_result) -> StatSnapshot:
        """Build a snapshot from an os.stat_result."""
        mode = result.st_mode
        return cls(
            size=result.st_size,
            is_file=stat_module.S_ISREG(mode),
            is_directory=stat_module.S_ISDIR(mode),
            is_symlink=stat_module.S_ISLNK(mode),
            mode=mode,
            atime=result.st_atime,
            mtime=result.st_mtime,
            ctime=result.st_ctime,
        )


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory scan."""

    name: str
    is_file: bool
    is_directory: bool
