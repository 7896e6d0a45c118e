"""CLI error handling for lessmore-cli.

This module wraps lessmore-core exceptions in user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
from rich.markup import escape

from lessmore_cli.output import error
from lessmore_core.errors import (
    BatchError,
    FilesystemError,
    LessMoreError,
    PreprocessorUnavailableError,
)

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (missing source, compile failure, bad config)
EXIT_SYSTEM_ERROR = 2  # System error (write failure, missing preprocessor)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()))


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - workers: Input should be greater than or equal to 1"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")

    return "\n".join(lines)


def exit_code_for(err: LessMoreError) -> int:
    """Map a lessmore-core error to a CLI exit code."""
    if isinstance(err, (FilesystemError, PreprocessorUnavailableError)):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def handle_pipeline_error(err: Exception) -> NoReturn:
    """Convert a pipeline or configuration error into a CLIError.

    Args:
        err: Exception raised while building or running the pipeline.

    Raises:
        CLIError: For lessmore and validation errors.
        Exception: Any other error is re-raised unchanged.
    """
    if isinstance(err, PydanticValidationError):
        raise CLIError(f"Invalid configuration:\n{format_pydantic_error(err)}") from err

    if isinstance(err, BatchError):
        lines = [err.user_message]
        lines.extend(f"  - {asset.error}" for asset in err.result.failed)
        raise CLIError("\n".join(lines), exit_code=EXIT_USER_ERROR) from err

    if isinstance(err, LessMoreError):
        raise CLIError(err.user_message, exit_code=exit_code_for(err)) from err

    if isinstance(err, FileNotFoundError):
        raise CLIError(str(err), exit_code=EXIT_SYSTEM_ERROR) from err

    raise err
