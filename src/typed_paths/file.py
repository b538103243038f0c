"""Regular-file handle."""

from __future__ import annotations

import logging
import os

from typed_paths.cache import CacheSlot, invalidates
from typed_paths.context import PathContext
from typed_paths.path import GenericPath, PathLike
from typed_paths.types import PathKind

logger = logging.getLogger(__name__)


class FileHandle(GenericPath):
    """Handle exposing operations on a regular file.

    Text reads are cached per encoding until the next write,
    move, rename, removal, or explicit clear_cache().
    """

    kind = PathKind.FILE

    def __init__(self, path: PathLike, *, context: PathContext | None = None) -> None:
        super().__init__(path, context=context)
        self._content_cache: CacheSlot[str] = CacheSlot()

    def clear_cache(self) -> None:
        """Drop cached metadata and content."""
        super().clear_cache()
        self._content_cache.invalidate()

    async def exists(self) -> bool:
        """Check if the path exists as a regular file."""
        return await self.is_file()

    async def read(self, encoding: str | None = None) -> str:
        """Read the file content as text.

        Args:
            encoding: Text encoding. Defaults to the configured encoding.

        Returns:
            File content, served from the content cache when fresh.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        encoding = encoding or self._context.settings.default_encoding
        cached = self._content_cache.get(encoding)
        if cached is not None:
            return cached
        content = await self._io(self._context.filesystem.read_text, self._path, encoding)
        return self._content_cache.set(content, encoding)

    async def read_bytes(self) -> bytes:
        """Read the raw file content. Never consults or fills the content cache."""
        return await self._io(self._context.filesystem.read_bytes, self._path)

    @invalidates
    async def write(
        self,
        data: str | bytes,
        encoding: str | None = None,
        ensure_parent: bool = True,
    ) -> None:
        """Write content, replacing the file.

        Args:
            data: Text or bytes to write.
            encoding: Text encoding for str data. Defaults to the configured encoding.
            ensure_parent: Create missing parent directories first.
        """
        filesystem = self._context.filesystem
        if ensure_parent:
            await self._io(filesystem.mkdir, os.path.dirname(self._path) or ".", True, True)

        logger.debug("Writing %s", self._path)
        if isinstance(data, bytes):
            await self._io(filesystem.write_bytes, self._path, data)
        else:
            encoding = encoding or self._context.settings.default_encoding
            await self._io(filesystem.write_text, self._path, data, encoding)

    async def size(self) -> int:
        """Return the file size in bytes."""
        return (await self.stat()).size

    @invalidates
    async def remove(self) -> None:
        """Delete the file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        logger.debug("Removing file %s", self._path)
        await self._io(self._context.filesystem.unlink, self._path)

    @invalidates
    async def create(self, recursive: bool = True) -> FileHandle:
        """Create an empty file, truncating an existing one.

        Args:
            recursive: Create all missing ancestors, not only the immediate parent.

        Returns:
            This handle.
        """
        filesystem = self._context.filesystem
        await self._io(filesystem.mkdir, os.path.dirname(self._path) or ".", recursive, True)
        logger.debug("Creating file %s", self._path)
        await self._io(filesystem.write_bytes, self._path, b"")
        return self

    async def ensure(self) -> FileHandle:
        """Create the file only if it does not exist yet.

        Returns:
            This handle.
        """
        if not await self.exists():
            await self.create()
        return self

    async def copy_to(self, target: PathLike) -> FileHandle:
        """Copy the file content to target.

        Returns:
            This handle, still pointing at the source.
        """
        logger.debug("Copying %s to %s", self._path, os.fspath(target))
        await self._io(self._context.filesystem.copy_file, self._path, os.fspath(target))
        return self

    @invalidates
    async def move_to(self, target: PathLike, modifying: bool = True) -> None:
        """Atomically move the file to target.

        Args:
            target: Destination path.
            modifying: Point this handle at the destination afterwards.
                When False the handle keeps the old, now missing, path.
        """
        destination = os.fspath(target)
        logger.debug("Moving %s to %s", self._path, destination)
        await self._io(self._context.filesystem.replace, self._path, destination)
        if modifying:
            self._set_path(destination)

    async def rename_to(self, new_name: str, modifying: bool = True) -> None:
        """Rename the file within its parent directory.

        Args:
            new_name: New final path component.
            modifying: Point this handle at the renamed file afterwards.
        """
        await self.move_to(os.path.join(os.path.dirname(self._path), new_name), modifying)
