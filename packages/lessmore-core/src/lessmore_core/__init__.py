"""lessmore-core: Stylesheet compilation pipeline.

This package provides:
- StylesheetConfig: Immutable pipeline configuration
- ProfileResolver: Profile defaults + lessmore.yaml + overrides
- StylesheetCompiler: exists/generate/parse/clean over a source tree
- Error types for not-found, compile and filesystem failures
"""

from __future__ import annotations

__version__ = "0.1.0"

# Compiler, components and models
from lessmore_core.compiler import (
    BatchResult,
    CleanResult,
    FunctionPreprocessor,
    LesscPreprocessor,
    Preprocessor,
    ProfileResolver,
    SourceFile,
    StylesheetCompiler,
)

# Error types
from lessmore_core.errors import (
    AmbiguousSourceError,
    BatchError,
    CompileError,
    ConfigurationError,
    FilesystemError,
    LessMoreError,
    PreprocessorUnavailableError,
    SourceNotFoundError,
)
from lessmore_core.observability import configure_logging

# Schema models
from lessmore_core.schemas import StylesheetConfig

__all__ = [
    "__version__",
    # Compiler
    "StylesheetCompiler",
    "ProfileResolver",
    "Preprocessor",
    "LesscPreprocessor",
    "FunctionPreprocessor",
    "SourceFile",
    "BatchResult",
    "CleanResult",
    # Errors
    "LessMoreError",
    "SourceNotFoundError",
    "AmbiguousSourceError",
    "CompileError",
    "FilesystemError",
    "ConfigurationError",
    "PreprocessorUnavailableError",
    "BatchError",
    # Configuration
    "StylesheetConfig",
    "configure_logging",
]
