"""Generic path value and typed casting between path kinds."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, Union

from typed_paths.cache import CacheSlot
from typed_paths.context import PathContext, default_context
from typed_paths.types import PathKind, StatSnapshot, check_cast

if TYPE_CHECKING:
    from typed_paths.directory import DirectoryHandle

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]

# Handle class registered for each kind, filled by GenericPath.__init_subclass__
_HANDLE_TYPES: dict[PathKind, type[GenericPath]] = {}


def handle_type(kind: PathKind) -> type[GenericPath]:
    """Return the handle class implementing a path kind."""
    return _HANDLE_TYPES[PathKind(kind)]


class GenericPath:
    """A normalized path string with metadata caching.

    Construction performs no I/O; the entity may or may not exist. Path
    algebra returns new values and never touches the filesystem. Metadata
    calls go through the handle's PathContext filesystem in a worker thread.

    Equality and hashing follow the kind and the current path. A modifying
    move_to or rename_to changes both, so re-insert a handle kept in a set
    or used as a dict key after moving it.
    """

    kind: ClassVar[PathKind] = PathKind.GENERIC

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "kind" in cls.__dict__:
            _HANDLE_TYPES[cls.kind] = cls

    def __init__(self, path: PathLike, *, context: PathContext | None = None) -> None:
        self._path = os.path.normpath(os.fspath(path))
        self._context = context or default_context()
        self._stat_cache: CacheSlot[StatSnapshot] = CacheSlot()

    @classmethod
    def at(cls, path: PathLike, *, context: PathContext | None = None) -> GenericPath:
        """Create a handle of this class for a path."""
        return cls(path, context=context)

    @property
    def path(self) -> str:
        return self._path

    @property
    def context(self) -> PathContext:
        return self._context

    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericPath):
            return NotImplemented
        return self.kind == other.kind and self._path == other._path

    def __hash__(self) -> int:
        return hash((self.kind, self._path))

    def _derive(self, path: PathLike) -> GenericPath:
        return GenericPath(path, context=self._context)

    def _set_path(self, path: PathLike) -> None:
        self._path = os.path.normpath(os.fspath(path))
        self.clear_cache()

    async def _io(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking filesystem call off the event loop."""
        return await asyncio.to_thread(func, *args)

    # Path algebra

    def join(self, *segments: PathLike) -> GenericPath:
        """Join segments onto this path using OS join semantics."""
        return self._derive(os.path.join(self._path, *map(os.fspath, segments)))

    def parent(self) -> DirectoryHandle:
        """Return the containing directory."""
        directory_type = handle_type(PathKind.DIRECTORY)
        return directory_type(os.path.dirname(self._path), context=self._context)  # type: ignore[return-value]

    def relative_to(self, base: PathLike) -> GenericPath:
        """Return this path expressed relative to base."""
        return self._derive(os.path.relpath(self._path, os.fspath(base)))

    def resolve(self) -> GenericPath:
        """Return the absolute form of this path."""
        return self._derive(os.path.abspath(self._path))

    def with_extension(self, extension: str) -> GenericPath:
        """Return a sibling path with the extension replaced.

        A missing leading dot is added; an empty extension strips it.
        """
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        return self._derive(
            os.path.join(os.path.dirname(self._path), f"{self.stem()}{extension}")
        )

    def with_name(self, name: str) -> GenericPath:
        """Return a sibling path with the final component replaced."""
        return self._derive(os.path.join(os.path.dirname(self._path), name))

    def basename(self) -> str:
        return os.path.basename(self._path)

    def stem(self) -> str:
        return os.path.splitext(self.basename())[0]

    def extension(self) -> str:
        return os.path.splitext(self.basename())[1]

    def is_absolute(self) -> bool:
        return os.path.isabs(self._path)

    # Metadata

    async def stat(self) -> StatSnapshot:
        """Return metadata, following symbolic links.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        return await self._fetch_stat(follow_symlinks=True)

    async def lstat(self) -> StatSnapshot:
        """Return metadata of the link itself for symbolic links.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        return await self._fetch_stat(follow_symlinks=False)

    async def _fetch_stat(self, follow_symlinks: bool) -> StatSnapshot:
        cached = self._stat_cache.get(follow_symlinks)
        if cached is not None:
            return cached
        filesystem = self._context.filesystem
        call = filesystem.stat if follow_symlinks else filesystem.lstat
        result = await self._io(call, self._path)
        return self._stat_cache.set(StatSnapshot.from_stat_result(result), follow_symlinks)

    def clear_cache(self) -> None:
        """Drop cached metadata."""
        self._stat_cache.invalidate()

    async def is_file(self) -> bool:
        """Check if the path is a regular file. Missing paths yield False."""
        try:
            return (await self.stat()).is_file
        except FileNotFoundError:
            return False

    async def is_directory(self) -> bool:
        """Check if the path is a directory. Missing paths yield False."""
        try:
            return (await self.stat()).is_directory
        except FileNotFoundError:
            return False

    # Casting

    def cast(self, kind: PathKind) -> Any:
        """Return a view of this path as another kind.

        Args:
            kind: Requested kind.

        Returns:
            A new handle of the requested kind sharing this path and context.

        Raises:
            TypeMismatchError: If a directory is cast to a file view or a
                file to a directory view.
        """
        return self.unchecked_cast(check_cast(self.kind, PathKind(kind)))

    def unchecked_cast(self, kind: PathKind) -> Any:
        """Return a view of this path as another kind without any checks.

        Only for callers that already established the entity type, for
        example after a successful is_file() or is_directory().
        """
        return handle_type(kind)(self._path, context=self._context)


_HANDLE_TYPES[PathKind.GENERIC] = GenericPath
