"""Typed path, file, directory and structured-data handles with async I/O."""

__version__ = "0.1.0"

from typed_paths.config import PathSettings
from typed_paths.context import PathContext, create_context
from typed_paths.directory import DirectoryHandle
from typed_paths.file import FileHandle
from typed_paths.path import GenericPath
from typed_paths.protocols import Codec, FileSystem
from typed_paths.serialization import DeserializationError, JsonCodec, YamlCodec
from typed_paths.structured import StructuredFile
from typed_paths.tempdir import TemporaryDirectory
from typed_paths.types import PathKind, StatSnapshot, TypeMismatchError

__all__ = [
    "__version__",
    "Codec",
    "DeserializationError",
    "DirectoryHandle",
    "FileHandle",
    "FileSystem",
    "GenericPath",
    "JsonCodec",
    "PathContext",
    "PathKind",
    "PathSettings",
    "StatSnapshot",
    "StructuredFile",
    "TemporaryDirectory",
    "TypeMismatchError",
    "YamlCodec",
    "create_context",
]
