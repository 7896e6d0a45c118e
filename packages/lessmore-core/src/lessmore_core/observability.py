"""Structured logging setup for lessmore.

Library modules log through ``structlog.get_logger(__name__)``; this module
configures the processor chain once for command line use.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor


def configure_logging(
    *,
    verbose: bool = False,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for lessmore.

    Args:
        verbose: Emit debug events (default: info and above).
        json_output: Render events as JSON lines instead of console text.
        stream: Output stream. Defaults to stderr so stdout stays clean
            for generated CSS.

    Example:
        >>> configure_logging(verbose=True)
        >>> structlog.get_logger("lessmore").debug("ready")
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, stream=stream or sys.stderr, format="%(message)s")

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
