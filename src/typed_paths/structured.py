"""Structured-data (serialized object) file handle."""

from __future__ import annotations

import logging
import os
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from typed_paths.cache import invalidates
from typed_paths.context import PathContext
from typed_paths.file import FileHandle
from typed_paths.path import PathLike
from typed_paths.protocols import Codec
from typed_paths.serialization import DeserializationError, codec_for_path
from typed_paths.types import PathKind

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

EMPTY_OBJECT: dict[str, Any] = {}


class StructuredFile(FileHandle):
    """File whose content is a serialized composite value.

    The codec is picked from the extension (YAML for .yaml/.yml, JSON
    otherwise) unless one is passed explicitly.
    """

    kind = PathKind.STRUCTURED

    def __init__(
        self,
        path: PathLike,
        *,
        context: PathContext | None = None,
        codec: Codec | None = None,
    ) -> None:
        super().__init__(path, context=context)
        self.codec = codec or codec_for_path(
            self._path, indent=self._context.settings.json_indent
        )

    async def read(self, encoding: str | None = None) -> Any:  # type: ignore[override]
        """Read and decode the payload.

        Returns:
            The decoded value.

        Raises:
            FileNotFoundError: If the file does not exist.
            DeserializationError: If the payload is malformed.
        """
        return self.codec.loads(await super().read(encoding))

    async def read_model(self, model_type: type[M], encoding: str | None = None) -> M:
        """Read the payload and validate it into a pydantic model.

        Args:
            model_type: Model class to validate against.
            encoding: Text encoding.

        Returns:
            The validated model.

        Raises:
            DeserializationError: If the payload is malformed or fails validation.
        """
        data = await self.read(encoding)
        try:
            return model_type.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(
                f"Invalid {model_type.__name__} payload in {self._path}: {e}"
            ) from e

    async def write(  # type: ignore[override]
        self,
        value: Any,
        encoding: str | None = None,
        ensure_parent: bool = True,
    ) -> None:
        """Serialize a value and write it.

        Composite values (mappings, sequences, pydantic models) are pretty
        printed; scalars are written compactly.

        Args:
            value: Value to serialize.
            encoding: Text encoding.
            ensure_parent: Create missing parent directories first.
        """
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        pretty = isinstance(value, (dict, list, tuple))
        await super().write(self.codec.dumps(value, pretty), encoding, ensure_parent)

    @invalidates
    async def create(self, recursive: bool = True) -> StructuredFile:
        """Create the file holding an empty object, replacing existing content.

        Args:
            recursive: Create all missing ancestors, not only the immediate parent.

        Returns:
            This handle.
        """
        filesystem = self._context.filesystem
        await self._io(filesystem.mkdir, os.path.dirname(self._path) or ".", recursive, True)
        logger.debug("Creating structured file %s", self._path)
        await self._io(
            filesystem.write_text,
            self._path,
            self.codec.dumps(EMPTY_OBJECT, False),
            self._context.settings.default_encoding,
        )
        return self
