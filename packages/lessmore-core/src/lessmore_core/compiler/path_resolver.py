"""Logical path resolution for lessmore.

Maps a logical path such as ``("sub", "dir", "homepage")`` to the source
file ``<source_root>/sub/dir/homepage.<ext>``. When more than one extension
matches, SOURCE_EXTENSIONS order decides (css > less > lss); with
``strict=True`` the match is rejected as ambiguous instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from lessmore_core.compiler.models import (
    SOURCE_EXTENSIONS,
    LogicalPath,
    SourceFile,
    is_partial_name,
    to_logical_path,
)
from lessmore_core.errors import AmbiguousSourceError, SourceNotFoundError

logger = structlog.get_logger(__name__)


class PathResolver:
    """Resolves logical paths to source files under a source root.

    Attributes:
        source_root: Directory that logical paths are relative to.
        strict: Raise AmbiguousSourceError on multiple matches.

    Example:
        >>> resolver = PathResolver(Path("app/stylesheets"))
        >>> resolver.resolve(["screen"]).path
        PosixPath('app/stylesheets/screen.less')
    """

    def __init__(self, source_root: Path, *, strict: bool = False) -> None:
        self.source_root = source_root
        self.strict = strict

    def candidates(self, logical_path: str | Sequence[str]) -> list[Path]:
        """Return every existing source for a logical path, in precedence order.

        Raises:
            ValueError: If the logical path is malformed.
        """
        segments: LogicalPath = to_logical_path(logical_path)
        directory = self.source_root.joinpath(*segments[:-1])
        found = []
        for extension in SOURCE_EXTENSIONS:
            path = directory / f"{segments[-1]}.{extension}"
            if path.is_file():
                found.append(path)
        return found

    def resolve(self, logical_path: str | Sequence[str]) -> SourceFile:
        """Resolve a logical path to a single source file.

        Partials are not filtered here; use exists() for the public check.

        Raises:
            SourceNotFoundError: If no source matches.
            AmbiguousSourceError: If several match and strict is enabled.
        """
        found = self.candidates(logical_path)
        if not found:
            raise SourceNotFoundError(to_logical_path(logical_path))
        if len(found) > 1:
            if self.strict:
                raise AmbiguousSourceError(to_logical_path(logical_path), found)
            logger.debug(
                "multiple_sources_matched",
                chosen=str(found[0]),
                ignored=[str(p) for p in found[1:]],
            )
        return SourceFile.from_path(found[0])

    def exists(self, logical_path: str | Sequence[str]) -> bool:
        """Check whether a logical path names a standalone stylesheet.

        Returns False for partials (``_``-prefixed last segment) even when
        a matching file exists.
        """
        segments = to_logical_path(logical_path)
        if is_partial_name(segments[-1]):
            return False
        return bool(self.candidates(segments))
