"""Settings shared by path handles."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

ENV_TEMP_ROOT = "TYPED_PATHS_TEMP_ROOT"
ENV_TEMP_PREFIX = "TYPED_PATHS_TEMP_PREFIX"
ENV_MAX_CONCURRENT_SCANS = "TYPED_PATHS_MAX_CONCURRENT_SCANS"


class PathSettings(BaseModel):
    """Tunable defaults for handles.

    Attributes:
        default_encoding: Text encoding used by reads and writes.
        temp_root: Parent of temporary directories. None means the OS default.
        temp_prefix: Prefix of generated temporary directory names.
        json_indent: Indent of pretty-printed JSON.
        max_concurrent_scans: Cap on in-flight directory scans during deep
            listing. None leaves the fan-out unbounded.
    """

    model_config = ConfigDict(frozen=True)

    default_encoding: str = "utf-8"
    temp_root: Path | None = None
    temp_prefix: str = "temp-"
    json_indent: int = Field(default=2, ge=0)
    max_concurrent_scans: int | None = Field(default=None, ge=1)

    @classmethod
    def create_default(cls) -> PathSettings:
        """Create settings from the environment.

        Reads TYPED_PATHS_TEMP_ROOT, TYPED_PATHS_TEMP_PREFIX and
        TYPED_PATHS_MAX_CONCURRENT_SCANS; unset variables keep the defaults.

        Returns:
            Validated PathSettings.

        Raises:
            pydantic.ValidationError: If an environment value is invalid.
        """
        overrides: dict[str, str] = {}
        if temp_root := os.environ.get(ENV_TEMP_ROOT):
            overrides["temp_root"] = temp_root
        if temp_prefix := os.environ.get(ENV_TEMP_PREFIX):
            overrides["temp_prefix"] = temp_prefix
        if max_scans := os.environ.get(ENV_MAX_CONCURRENT_SCANS):
            overrides["max_concurrent_scans"] = max_scans
        return cls.model_validate(overrides)
