"""Context for dependency injection into path handles.

Handles reach the operating system only through the context they carry.
Production code uses the shared default context; tests construct
PathContext directly with a mock filesystem or custom settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from typed_paths.config import PathSettings
from typed_paths.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from typed_paths.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass(frozen=True)
class PathContext:
    """Container for handle dependencies.

    Derived handles (joins, casts, listings) inherit the context of the
    handle they came from.
    """

    settings: PathSettings = field(default_factory=PathSettings)
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(settings: PathSettings | None = None) -> PathContext:
    """Factory for handle dependencies.

    Args:
        settings: Override settings. Defaults to environment-derived settings.

    Returns:
        PathContext wired with the real filesystem.
    """
    from typed_paths.filesystem import RealFileSystem

    return PathContext(
        settings=settings or PathSettings.create_default(),
        filesystem=RealFileSystem(),
    )


@lru_cache(maxsize=1)
def default_context() -> PathContext:
    """Return the process-wide context used when a handle gets none."""
    return create_context()
