"""Directory handle with listing, deep listing and tree walk."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Union

from typed_paths.cache import invalidates
from typed_paths.file import FileHandle
from typed_paths.path import GenericPath, PathLike
from typed_paths.types import DirEntry, PathKind

logger = logging.getLogger(__name__)

Entry = Union[FileHandle, "DirectoryHandle"]
Visitor = Callable[[Entry], Union[Awaitable[None], None]]


@dataclass
class _Listing:
    """Files and directories collected below one directory."""

    files: list[FileHandle] = field(default_factory=list)
    directories: list[DirectoryHandle] = field(default_factory=list)

    def extend(self, other: _Listing) -> None:
        self.files.extend(other.files)
        self.directories.extend(other.directories)


class DirectoryHandle(GenericPath):
    """Handle exposing operations on a directory.

    Shallow listings scan once and keep the platform's order. Deep listings
    scan subdirectories concurrently; a directory always precedes its own
    descendants, but sibling subtrees carry no ordering guarantee. Sort the
    result when a stable order matters.
    """

    kind = PathKind.DIRECTORY

    async def exists(self) -> bool:
        """Check if the path exists as a directory."""
        return await self.is_directory()

    def _file(self, parent: str, name: str) -> FileHandle:
        return FileHandle(os.path.join(parent, name), context=self._context)

    def _directory(self, parent: str, name: str) -> DirectoryHandle:
        return DirectoryHandle(os.path.join(parent, name), context=self._context)

    async def _scan(self, path: str) -> list[DirEntry]:
        return await self._io(self._context.filesystem.scandir, path)

    async def list_files(self) -> list[FileHandle]:
        """List regular files directly inside this directory."""
        entries = await self._scan(self._path)
        return [self._file(self._path, e.name) for e in entries if e.is_file]

    async def list_directories(self) -> list[DirectoryHandle]:
        """List subdirectories directly inside this directory."""
        entries = await self._scan(self._path)
        return [self._directory(self._path, e.name) for e in entries if e.is_directory]

    async def list(self) -> list[Entry]:
        """List files and subdirectories directly inside this directory.

        Entries that are neither (sockets, broken links) are skipped.
        """
        items: list[Entry] = []
        for entry in await self._scan(self._path):
            if entry.is_file:
                items.append(self._file(self._path, entry.name))
            elif entry.is_directory:
                items.append(self._directory(self._path, entry.name))
        return items

    # Deep listing

    def _scan_limiter(self) -> contextlib.AbstractAsyncContextManager:
        limit = self._context.settings.max_concurrent_scans
        if limit is None:
            return contextlib.nullcontext()
        return asyncio.Semaphore(limit)

    async def _list_all_deep(self) -> _Listing:
        limiter = self._scan_limiter()

        async def scan(path: str) -> _Listing:
            async with limiter:
                entries = await self._scan(path)
            return await merge(path, entries)

        async def visit(path: str, entry: DirEntry) -> _Listing:
            if entry.is_file:
                return _Listing(files=[self._file(path, entry.name)])
            if entry.is_directory:
                directory = self._directory(path, entry.name)
                nested = await scan(directory.path)
                return _Listing(
                    files=nested.files,
                    directories=[directory, *nested.directories],
                )
            return _Listing()

        async def merge(path: str, entries: list[DirEntry]) -> _Listing:
            merged = _Listing()
            for result in await asyncio.gather(*(visit(path, e) for e in entries)):
                merged.extend(result)
            return merged

        return await scan(self._path)

    async def list_files_deep(self) -> list[FileHandle]:
        """List every regular file below this directory."""
        return (await self._list_all_deep()).files

    async def list_directories_deep(self) -> list[DirectoryHandle]:
        """List every directory below this directory."""
        return (await self._list_all_deep()).directories

    async def list_deep(self) -> list[Entry]:
        """List every file, then every directory, below this directory."""
        listing = await self._list_all_deep()
        return [*listing.files, *listing.directories]

    async def iter_deep(self) -> AsyncIterator[Entry]:
        """Yield entries below this directory one branch at a time, parents first."""
        for item in await self.list():
            yield item
            if isinstance(item, DirectoryHandle):
                async for nested in item.iter_deep():
                    yield nested

    async def walk(self, visit: Visitor) -> None:
        """Visit every entry depth-first, parents before children.

        The visitor may be a plain function or a coroutine function. Descent
        into a subdirectory starts only after the visitor has returned for it.

        Args:
            visit: Called once per file and directory below this one.
        """
        async for item in self.iter_deep():
            result = visit(item)
            if inspect.isawaitable(result):
                await result

    # Mutation

    @invalidates
    async def clear(self) -> None:
        """Remove every child while keeping the directory itself.

        Children are removed concurrently. All removals run to completion;
        the first failure is raised afterwards.
        """
        names = [entry.name for entry in await self._scan(self._path)]
        remove_entry = self._context.filesystem.remove_entry
        logger.debug("Clearing %d entries from %s", len(names), self._path)
        results = await asyncio.gather(
            *(self._io(remove_entry, os.path.join(self._path, name)) for name in names),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            logger.warning("Failed to clear entry in %s: %s", self._path, failure)
        if failures:
            raise failures[0]

    @invalidates
    async def remove(self) -> None:
        """Delete the directory and everything below it."""
        logger.debug("Removing directory %s", self._path)
        await self._io(self._context.filesystem.rmtree, self._path)

    @invalidates
    async def create(self, recursive: bool = True) -> DirectoryHandle:
        """Create the directory.

        Args:
            recursive: Create missing ancestors and tolerate an existing directory.
                When False the parent must exist and the directory must not.

        Returns:
            This handle.

        Raises:
            FileExistsError: If recursive is False and the directory exists.
        """
        logger.debug("Creating directory %s", self._path)
        await self._io(self._context.filesystem.mkdir, self._path, recursive, recursive)
        return self

    async def ensure(self) -> DirectoryHandle:
        """Create the directory only if it does not exist yet.

        Returns:
            This handle.
        """
        if not await self.exists():
            await self.create()
        return self

    async def copy_to(self, target: PathLike) -> DirectoryHandle:
        """Recursively copy this directory to target, merging into it if present.

        Returns:
            This handle, still pointing at the source.
        """
        logger.debug("Copying tree %s to %s", self._path, os.fspath(target))
        await self._io(self._context.filesystem.copytree, self._path, os.fspath(target))
        return self

    @invalidates
    async def move_to(self, target: PathLike, modifying: bool = True) -> None:
        """Atomically move the whole tree to target.

        Args:
            target: Destination path.
            modifying: Point this handle at the destination afterwards.
        """
        destination = os.fspath(target)
        logger.debug("Moving tree %s to %s", self._path, destination)
        await self._io(self._context.filesystem.replace, self._path, destination)
        if modifying:
            self._set_path(destination)

    async def rename_to(self, new_name: str, modifying: bool = True) -> None:
        """Rename the directory within its parent.

        Args:
            new_name: New final path component.
            modifying: Point this handle at the renamed directory afterwards.
        """
        await self.move_to(os.path.join(os.path.dirname(self._path), new_name), modifying)
