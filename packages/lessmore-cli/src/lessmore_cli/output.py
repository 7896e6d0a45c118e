"""Rich console output utilities for lessmore-cli.

This module provides formatted console output with Rich, supporting
colored success/error/warning messages and respecting the NO_COLOR
environment variable. Messages go to stderr so that stdout carries only
generated CSS or JSON.
"""

from __future__ import annotations

import json
import os
from typing import Any

import click
from rich.console import Console

# Rich respects NO_COLOR itself, but we also support --no-color
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False, stderr: bool = True) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.
        stderr: Write to stderr instead of stdout.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        stderr=stderr,
    )


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Generated 3 stylesheets")
        ✓ Generated 3 stylesheets
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("No stylesheet source found for 'screen'")
        ✗ No stylesheet source found for 'screen'
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_json(data: dict[str, Any]) -> None:
    """Print JSON data to stdout, unstyled so it can be piped.

    Args:
        data: JSON-serializable mapping.
    """
    click.echo(json.dumps(data, indent=2, default=str))


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
