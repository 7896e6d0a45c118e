"""Compiler module for lessmore.

This module exports the pipeline components and the facade:
- StylesheetCompiler: Facade wiring every component from one config
- ProfileResolver: Build StylesheetConfig through the override chain
- PathResolver: Logical path to source file
- Preprocessor, LesscPreprocessor, FunctionPreprocessor: LESS capability
- CompilerAdapter: Source file to CSS text
- PostProcessor: Compression and header banner
- OutputWriter: CSS text to destination file
- BatchGenerator: Discover and generate every source
- Cleaner: Remove generated outputs
"""

from __future__ import annotations

from lessmore_core.compiler.adapter import CompilerAdapter
from lessmore_core.compiler.batch import BatchGenerator, discover_sources
from lessmore_core.compiler.cleaner import Cleaner
from lessmore_core.compiler.compiler import StylesheetCompiler
from lessmore_core.compiler.models import (
    PARTIAL_PREFIX,
    SOURCE_EXTENSIONS,
    AssetResult,
    AssetStatus,
    BatchResult,
    CleanResult,
    CompiledAsset,
    LogicalPath,
    SourceFile,
    to_logical_path,
)
from lessmore_core.compiler.path_resolver import PathResolver
from lessmore_core.compiler.postprocessor import (
    HEADER_TEMPLATE,
    PostProcessor,
    compress,
    render_header,
)
from lessmore_core.compiler.preprocessor import (
    DEFAULT_LESSC_COMMAND,
    FunctionPreprocessor,
    LesscPreprocessor,
    Preprocessor,
)
from lessmore_core.compiler.profile_resolver import (
    DEFAULT_PROFILE,
    PROFILE_DEFAULTS,
    PROFILE_ENV_VAR,
    ProfileResolver,
    get_profile_env,
)
from lessmore_core.compiler.writer import OutputWriter

__all__: list[str] = [
    # Facade
    "StylesheetCompiler",
    # Configuration resolution
    "ProfileResolver",
    "get_profile_env",
    "PROFILE_ENV_VAR",
    "PROFILE_DEFAULTS",
    "DEFAULT_PROFILE",
    # Components
    "PathResolver",
    "CompilerAdapter",
    "PostProcessor",
    "OutputWriter",
    "BatchGenerator",
    "discover_sources",
    "Cleaner",
    # Preprocessors
    "Preprocessor",
    "LesscPreprocessor",
    "FunctionPreprocessor",
    "DEFAULT_LESSC_COMMAND",
    # Post-processing helpers
    "HEADER_TEMPLATE",
    "compress",
    "render_header",
    # Models
    "LogicalPath",
    "SourceFile",
    "CompiledAsset",
    "AssetStatus",
    "AssetResult",
    "BatchResult",
    "CleanResult",
    "to_logical_path",
    "SOURCE_EXTENSIONS",
    "PARTIAL_PREFIX",
]
