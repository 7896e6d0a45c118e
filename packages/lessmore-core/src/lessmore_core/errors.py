"""Custom exception hierarchy for lessmore-core.

This module defines the exception classes raised by the stylesheet pipeline:
- LessMoreError: Base exception for all lessmore errors
- SourceNotFoundError: A logical path resolves to no source file
- AmbiguousSourceError: A logical path matches several sources (strict mode)
- CompileError: The preprocessor rejected a source
- FilesystemError: Directory creation, write or delete failed
- ConfigurationError: Configuration file or values are invalid
- PreprocessorUnavailableError: The external preprocessor is not installed
- BatchError: One or more sources failed in a keep-going batch run

User-facing messages are safe to display. Technical details passed as
``internal_details`` are logged via structlog and never shown to the user.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from lessmore_core.compiler.models import BatchResult

logger = structlog.get_logger(__name__)


class LessMoreError(Exception):
    """Base exception for lessmore.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging only.

    Example:
        >>> raise LessMoreError(
        ...     "Stylesheet generation failed",
        ...     internal_details="lessc exited with status 2",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize LessMoreError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "lessmore_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class SourceNotFoundError(LessMoreError):
    """Raised when a logical path does not resolve to a source file.

    Attributes:
        logical_path: The requested path segments.

    Example:
        >>> raise SourceNotFoundError(("sub", "missing"))
        # User sees: "No stylesheet source found for 'sub/missing'"
    """

    def __init__(
        self,
        logical_path: Sequence[str],
        *,
        internal_details: str | None = None,
    ) -> None:
        self.logical_path = tuple(logical_path)
        super().__init__(
            f"No stylesheet source found for '{'/'.join(self.logical_path)}'",
            internal_details=internal_details,
        )


class AmbiguousSourceError(LessMoreError):
    """Raised by strict resolution when several extensions match a logical path.

    Attributes:
        logical_path: The requested path segments.
        candidates: Every matching source file, in precedence order.
    """

    def __init__(self, logical_path: Sequence[str], candidates: Sequence[Path]) -> None:
        self.logical_path = tuple(logical_path)
        self.candidates = list(candidates)
        names = ", ".join(p.name for p in self.candidates)
        super().__init__(
            f"Stylesheet '{'/'.join(self.logical_path)}' is ambiguous. Candidates: {names}"
        )


class CompileError(LessMoreError):
    """Raised when the preprocessor rejects a source file.

    No partial output is produced for the failing source.

    Attributes:
        source_path: Path of the source that failed to compile.
        message: Message reported by the preprocessor.

    Example:
        >>> raise CompileError(Path("app/stylesheets/screen.less"), "Unrecognised input")
        # User sees: "Failed to compile app/stylesheets/screen.less: Unrecognised input"
    """

    def __init__(
        self,
        source_path: Path | str,
        message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        self.source_path = Path(source_path)
        self.message = message
        super().__init__(
            f"Failed to compile {self.source_path}: {message}",
            internal_details=internal_details,
        )


class FilesystemError(LessMoreError):
    """Raised when creating a directory, writing or deleting a file fails.

    Never retried automatically.

    Attributes:
        path: Path the operation targeted.
        operation: Operation that failed (mkdir, write, delete, read).
        reason: Underlying OS error message.
    """

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot {operation} {self.path}: {reason}")


class ConfigurationError(LessMoreError):
    """Raised when configuration file parsing or validation fails.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid destination path",
        ...     file_path="lessmore.yaml",
        ...     field_path="destination_path",
        ... )
        # User sees: "Invalid destination path (in lessmore.yaml, field 'destination_path')"
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class PreprocessorUnavailableError(LessMoreError):
    """Raised at construction time when the external preprocessor is missing.

    Attributes:
        command: The executable that could not be found.
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(
            f"Preprocessor '{command}' not found on PATH. "
            "Install it (npm install -g less) or pass the path with --lessc."
        )


class BatchError(LessMoreError):
    """Raised at the end of a keep-going batch run when any source failed.

    Attributes:
        result: The batch result, including every per-source outcome.
    """

    def __init__(self, result: BatchResult) -> None:
        self.result = result
        failed = result.failed
        super().__init__(
            f"{len(failed)} of {len(result.assets)} stylesheets failed to generate"
        )
