"""Value models for the stylesheet pipeline.

This module defines:
- LogicalPath: Extension-free tuple of path segments identifying an asset
- SourceFile: A resolved source file on disk
- CompiledAsset: CSS text plus the source it came from
- AssetResult / BatchResult: Outcome of a batch run
- CleanResult: Outcome of a clean run
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Recognized source extensions, in resolution precedence order
SOURCE_EXTENSIONS: tuple[str, ...] = ("css", "less", "lss")

# Extension of sources that are copied without preprocessing
PASSTHROUGH_EXTENSION = "css"

# Text codec for sources and outputs; undecodable bytes round-trip unchanged
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"

# File name prefix marking a partial (import-only) source
PARTIAL_PREFIX = "_"

LogicalPath = tuple[str, ...]


def to_logical_path(value: str | Sequence[str]) -> LogicalPath:
    """Normalize a logical path given as segments or as a slash-separated string.

    Args:
        value: Segments (``["sub", "homepage"]``) or ``"sub/homepage"``.

    Returns:
        Tuple of path segments.

    Raises:
        ValueError: If the path is empty or a segment is empty, ``.``/``..``,
            or contains a directory separator.

    Example:
        >>> to_logical_path("sub/dir/homepage")
        ('sub', 'dir', 'homepage')
    """
    segments = tuple(value.strip("/").split("/")) if isinstance(value, str) else tuple(value)
    if not segments:
        raise ValueError("Logical path must have at least one segment")
    for segment in segments:
        if not segment or segment in (".", "..") or "/" in segment or "\\" in segment:
            raise ValueError(f"Invalid logical path segment: {segment!r}")
    return segments


def is_partial_name(name: str) -> bool:
    """Return True if a file or segment name marks a partial."""
    return name.startswith(PARTIAL_PREFIX)


@dataclass(frozen=True)
class SourceFile:
    """A stylesheet source that exists on disk.

    Attributes:
        path: Location of the file, under the configured source root.
        extension: One of SOURCE_EXTENSIONS, without the leading dot.
    """

    path: Path
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        """Build a SourceFile from a path with a recognized extension.

        Raises:
            ValueError: If the extension is not recognized.
        """
        extension = path.suffix[1:]
        if extension not in SOURCE_EXTENSIONS:
            raise ValueError(f"Unsupported stylesheet extension: {path.name}")
        return cls(path=path, extension=extension)

    @property
    def is_passthrough(self) -> bool:
        """True for plain .css sources, which are not preprocessed."""
        return self.extension == PASSTHROUGH_EXTENSION

    @property
    def is_partial(self) -> bool:
        return is_partial_name(self.path.stem)


@dataclass(frozen=True)
class CompiledAsset:
    """CSS produced from a single source file."""

    css: str
    source: SourceFile


class AssetStatus(str, Enum):
    """Outcome of generating a single stylesheet.

    Attributes:
        WRITTEN: Compiled and written to its destination
        FAILED: Compilation failed (keep-going mode only)
    """

    WRITTEN = "written"
    FAILED = "failed"


class AssetResult(BaseModel):
    """Result of generating one discovered source.

    Attributes:
        logical_path: Logical path derived from the source location
        source: Source file path
        destination: Written output path (None on failure)
        status: Outcome status
        error: Error message on failure

    Example:
        >>> result = AssetResult(
        ...     logical_path=("screen",),
        ...     source=Path("app/stylesheets/screen.less"),
        ...     destination=Path("public/stylesheets/screen.css"),
        ...     status=AssetStatus.WRITTEN,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    logical_path: tuple[str, ...] = Field(..., min_length=1, description="Logical path")
    source: Path = Field(..., description="Source file path")
    destination: Path | None = Field(default=None, description="Output file path")
    status: AssetStatus = Field(..., description="Outcome status")
    error: str | None = Field(default=None, description="Failure message")


class BatchResult(BaseModel):
    """Aggregated result of a batch run, in traversal order.

    Attributes:
        assets: Per-source results
        concat_destination: Path of the concatenated output, if written
        started_at: When the run started
        finished_at: When the run finished
        total_duration_ms: Total duration in milliseconds
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    assets: list[AssetResult] = Field(default_factory=list, description="Per-source results")
    concat_destination: Path | None = Field(default=None, description="Concatenated output")
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Start time"
    )
    finished_at: datetime | None = Field(default=None, description="End time")
    total_duration_ms: int = Field(default=0, ge=0, description="Total duration")

    @property
    def written(self) -> list[AssetResult]:
        """Results that were written."""
        return [a for a in self.assets if a.status == AssetStatus.WRITTEN]

    @property
    def failed(self) -> list[AssetResult]:
        """Results that failed to compile."""
        return [a for a in self.assets if a.status == AssetStatus.FAILED]

    @property
    def succeeded(self) -> bool:
        return not self.failed


class CleanResult(BaseModel):
    """Outcome of removing generated stylesheets.

    Attributes:
        removed: Destination files that were deleted
        missing: Destination files that did not exist
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    removed: list[Path] = Field(default_factory=list, description="Deleted files")
    missing: list[Path] = Field(default_factory=list, description="Absent files")
