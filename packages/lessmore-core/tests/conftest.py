"""Shared pytest fixtures for lessmore-core tests.

This module provides common fixtures used across unit and integration tests:
a stub preprocessor that stands in for lessc, and a factory for source trees.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from lessmore_core.compiler import FunctionPreprocessor
from lessmore_core.schemas import StylesheetConfig

# What the stub preprocessor returns for every .less/.lss source
STUB_CSS = "body {\n  color: red;\n}\n"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def stub_css() -> str:
    """Return the CSS emitted by the stub preprocessors."""
    return STUB_CSS


@pytest.fixture
def stub_preprocessor() -> FunctionPreprocessor:
    """Return a preprocessor that ignores its input and emits STUB_CSS."""
    return FunctionPreprocessor(lambda source: STUB_CSS)


@pytest.fixture
def failing_preprocessor() -> FunctionPreprocessor:
    """Return a preprocessor that rejects sources containing ``@error``.

    Every other source compiles to STUB_CSS.
    """

    def _transform(source: str) -> str:
        if "@error" in source:
            raise ValueError("Unrecognised input")
        return STUB_CSS

    return FunctionPreprocessor(_transform)


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Return the (not yet created) stylesheet source root."""
    return tmp_path / "app" / "stylesheets"


@pytest.fixture
def make_sources(source_root: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture that writes source files under source_root.

    Returns:
        Function taking ``{"sub/screen.less": "..."}`` and returning the root.
    """

    def _create(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = source_root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode("utf-8"))
        source_root.mkdir(parents=True, exist_ok=True)
        return source_root

    return _create


@pytest.fixture
def make_config(tmp_path: Path, source_root: Path) -> Callable[..., StylesheetConfig]:
    """Factory fixture for a StylesheetConfig rooted in tmp_path.

    Defaults to no compression and no header so output equals the
    preprocessor output plus the trailing newline.
    """

    def _create(**overrides: object) -> StylesheetConfig:
        values: dict[str, object] = {
            "source_path": source_root,
            "destination_root": tmp_path / "public",
            "compression": False,
            "header": False,
        }
        values.update(overrides)
        return StylesheetConfig.model_validate(values)

    return _create
