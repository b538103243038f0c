"""Self-cleaning temporary directory."""

from __future__ import annotations

import inspect
import logging
import os
import tempfile
import uuid
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import TypeVar, Union

from typed_paths.context import PathContext, default_context
from typed_paths.directory import DirectoryHandle
from typed_paths.path import PathLike
from typed_paths.types import PathKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _unique_temp_path(context: PathContext) -> str:
    """Build a fresh path below the configured temporary root."""
    settings = context.settings
    root = os.fspath(settings.temp_root) if settings.temp_root else tempfile.gettempdir()
    return os.path.join(root, f"{settings.temp_prefix}{uuid.uuid4()}")


class TemporaryDirectory(DirectoryHandle):
    """Directory that exists only for the duration of a scope.

    Construction only picks a unique path. The directory is created on
    entering the scope and removed recursively on every exit path::

        async with TemporaryDirectory() as tmp:
            await tmp.join("data.txt").cast(PathKind.FILE).write("hello")

        result = await TemporaryDirectory().with_scope(build_fixture)
    """

    kind = PathKind.TEMPORARY

    def __init__(
        self, path: PathLike | None = None, *, context: PathContext | None = None
    ) -> None:
        context = context or default_context()
        super().__init__(path if path is not None else _unique_temp_path(context), context=context)

    async def __aenter__(self) -> TemporaryDirectory:
        await self.create()
        logger.debug("Entered temporary directory %s", self._path)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            await self.remove()
            logger.debug("Removed temporary directory %s", self._path)
        finally:
            self.clear_cache()

    async def with_scope(
        self, body: Callable[[TemporaryDirectory], Union[Awaitable[T], T]]
    ) -> T:
        """Run body with the directory created, then remove it.

        Removal happens whether body returns or raises. A failure during
        removal propagates; if body also failed, its exception is chained
        as the context.

        Args:
            body: Called with this handle. May be a plain function or a
                coroutine function.

        Returns:
            Whatever body returned.
        """
        async with self:
            result = body(self)
            if inspect.isawaitable(result):
                result = await result
            return result  # type: ignore[return-value]
