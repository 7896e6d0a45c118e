"""CLI command modules.

This package contains the implementation of all CLI subcommands.
"""

from __future__ import annotations

__all__: list[str] = []
