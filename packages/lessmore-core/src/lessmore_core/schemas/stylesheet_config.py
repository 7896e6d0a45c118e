"""StylesheetConfig model for lessmore.

This module defines the immutable configuration value that is built once
(see ProfileResolver) and passed into every pipeline component, plus the
loader for ``lessmore.yaml`` files.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from lessmore_core.errors import ConfigurationError

# Standard configuration file name
CONFIG_FILE_NAME = "lessmore.yaml"


def _check_relative_name(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    pure = PurePosixPath(value)
    if pure.is_absolute() or ".." in pure.parts:
        raise ValueError(f"{field_name} must be a relative path without '..'")
    return value


class StylesheetConfig(BaseModel):
    """Configuration for compiling a stylesheet source tree.

    Attributes:
        source_path: Root directory scanned for .css/.less/.lss sources.
        destination_root: Public directory that output is placed under.
        destination_path: Sub-directory of destination_root for generated CSS.
        compression: Delete every newline from generated CSS.
        header: Prepend the "auto generated" banner to generated CSS.
        concat: Name of a file that receives all generated CSS, or None.
        postprocess_css: Apply compression/header to plain .css sources too.
        exclude_partials: Skip ``_``-prefixed sources during batch discovery.
        strict_resolution: Treat multiple extension matches as an error.
        keep_going: Collect compile failures and continue the batch.
        workers: Size of the compile worker pool (1 = sequential).
        profile: Deployment profile that supplied the defaults.

    Example:
        >>> config = StylesheetConfig(source_path=Path("app/stylesheets"), header=True)
        >>> config.destination_dir
        PosixPath('public/stylesheets')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_path: Path = Field(
        default=Path("app/stylesheets"),
        description="Root directory of stylesheet sources",
    )
    destination_root: Path = Field(
        default=Path("public"),
        description="Public directory that generated CSS is placed under",
    )
    destination_path: str = Field(
        default="stylesheets",
        description="Sub-directory of destination_root for generated CSS",
    )
    compression: bool = Field(default=True, description="Remove newlines from output")
    header: bool = Field(default=False, description="Prepend auto-generated banner")
    concat: str | None = Field(
        default=None,
        description="Name of the concatenated output file (without .css)",
    )
    postprocess_css: bool = Field(
        default=False,
        description="Apply compression and header to plain .css sources",
    )
    exclude_partials: bool = Field(
        default=False,
        description="Exclude _partial sources from batch discovery",
    )
    strict_resolution: bool = Field(
        default=False,
        description="Reject logical paths that match more than one source",
    )
    keep_going: bool = Field(
        default=False,
        description="Continue the batch after a compile failure",
    )
    workers: int = Field(default=1, ge=1, le=64, description="Compile worker pool size")
    profile: str = Field(default="production", min_length=1, description="Deployment profile")

    @field_validator("concat", mode="before")
    @classmethod
    def normalize_concat(cls, value: Any) -> Any:
        """Accept ``false`` (and empty strings) as "no concatenation"."""
        if value is False or value == "":
            return None
        if value is True:
            raise ValueError("concat must be a file name or false")
        return value

    @field_validator("concat")
    @classmethod
    def validate_concat(cls, value: str | None) -> str | None:
        if value is None:
            return None
        _check_relative_name(value, "concat")
        if any(segment in ("", ".") for segment in value.split("/")):
            raise ValueError("concat must not contain empty or '.' path segments")
        return value

    @field_validator("destination_path")
    @classmethod
    def validate_destination_path(cls, value: str) -> str:
        return _check_relative_name(value, "destination_path")

    @property
    def destination_dir(self) -> Path:
        """Directory that generated CSS files are written to."""
        return self.destination_root / self.destination_path


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a lessmore.yaml file into a raw mapping.

    Args:
        path: Path to the configuration file.

    Returns:
        Mapping of configuration keys (empty for an empty file).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the YAML is invalid or not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        detail = f"line {mark.line + 1}, column {mark.column + 1}" if mark else str(exc)
        raise ConfigurationError(
            f"Invalid YAML syntax at {detail}",
            file_path=str(path),
            internal_details=str(exc),
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping", file_path=str(path))
    return data
