"""Serialization codecs for structured-data files."""

from __future__ import annotations

import json
from typing import Any

import yaml

from typed_paths.protocols import Codec

YAML_EXTENSIONS = (".yaml", ".yml")


class DeserializationError(ValueError):
    """Raised when a structured-data payload cannot be parsed."""

    pass


class JsonCodec:
    """JSON codec. Pretty output uses a fixed indent."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def dumps(self, value: Any, pretty: bool) -> str:
        if pretty:
            return json.dumps(value, indent=self.indent, default=str)
        return json.dumps(value, default=str)

    def loads(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"Invalid JSON payload: {e}") from e


class YamlCodec:
    """YAML codec backed by PyYAML's safe loader and dumper."""

    def dumps(self, value: Any, pretty: bool) -> str:
        return yaml.safe_dump(
            value,
            default_flow_style=not pretty,
            sort_keys=False,
            allow_unicode=True,
        )

    def loads(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DeserializationError(f"Invalid YAML payload: {e}") from e


def codec_for_path(path: str, indent: int = 2) -> Codec:
    """Pick a codec from a file extension.

    Args:
        path: File path; only its extension is inspected.
        indent: JSON indent used for pretty output.

    Returns:
        YamlCodec for .yaml/.yml files, JsonCodec otherwise.
    """
    if path.lower().endswith(YAML_EXTENSIONS):
        return YamlCodec()
    return JsonCodec(indent=indent)
