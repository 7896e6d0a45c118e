"""StylesheetCompiler facade for lessmore.

This module wires the pipeline components together from one immutable
StylesheetConfig:

    discovery -> resolution -> compile -> post-process -> write

and exposes the entry points used by request-serving and build glue:
exists(), generate(), parse() and clean().
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from lessmore_core.compiler.adapter import CompilerAdapter
from lessmore_core.compiler.batch import BatchGenerator
from lessmore_core.compiler.cleaner import Cleaner
from lessmore_core.compiler.models import BatchResult, CleanResult, SourceFile
from lessmore_core.compiler.path_resolver import PathResolver
from lessmore_core.compiler.postprocessor import PostProcessor
from lessmore_core.compiler.preprocessor import LesscPreprocessor, Preprocessor
from lessmore_core.compiler.profile_resolver import ProfileResolver
from lessmore_core.compiler.writer import OutputWriter
from lessmore_core.schemas import StylesheetConfig

logger = structlog.get_logger(__name__)


class StylesheetCompiler:
    """Compile a stylesheet source tree into a parallel tree of CSS files.

    Example:
        >>> compiler = StylesheetCompiler(
        ...     StylesheetConfig(source_path=Path("app/stylesheets")),
        ...     preprocessor=FunctionPreprocessor(my_less_compiler),
        ... )
        >>> compiler.exists(["screen"])
        True
        >>> css = compiler.generate(["screen"])
        >>> result = compiler.parse()
        >>> compiler.clean()
    """

    def __init__(
        self,
        config: StylesheetConfig | None = None,
        preprocessor: Preprocessor | None = None,
    ) -> None:
        """Initialize the StylesheetCompiler.

        Args:
            config: Pipeline configuration. If None, resolved from the
                LESSMORE_ENV profile and an optional ./lessmore.yaml.
            preprocessor: LESS compiler capability. If None, uses lessc.

        Raises:
            PreprocessorUnavailableError: If no preprocessor is given and
                lessc is not installed.
        """
        self.config = config if config is not None else ProfileResolver().resolve()
        self.preprocessor = preprocessor if preprocessor is not None else LesscPreprocessor()

        self.resolver = PathResolver(
            self.config.source_path,
            strict=self.config.strict_resolution,
        )
        self.adapter = CompilerAdapter(self.preprocessor)
        self.postprocessor = PostProcessor.from_config(self.config)
        self.writer = OutputWriter(self.config.destination_dir)
        self.generator = BatchGenerator(
            self.config,
            self.resolver,
            self.adapter,
            self.postprocessor,
            self.writer,
        )
        self.cleaner = Cleaner(self.config)

        logger.debug(
            "compiler_initialized",
            profile=self.config.profile,
            source_path=str(self.config.source_path),
            destination_dir=str(self.config.destination_dir),
        )

    def exists(self, logical_path: str | Sequence[str]) -> bool:
        """Check whether a logical path names a standalone (non-partial) stylesheet."""
        return self.resolver.exists(logical_path)

    def resolve(self, logical_path: str | Sequence[str]) -> SourceFile:
        """Resolve a logical path to its source file."""
        return self.resolver.resolve(logical_path)

    def generate(self, logical_path: str | Sequence[str]) -> str:
        """Return the generated CSS for a logical path.

        Raises:
            SourceNotFoundError: If no source matches.
            CompileError: If the preprocessor rejects the source.
        """
        return self.generator.generate(logical_path)

    def discover_sources(self) -> list[SourceFile]:
        """List every source a batch run will process, in traversal order."""
        return self.generator.discover_sources()

    def parse(self) -> BatchResult:
        """Generate every stylesheet (and the concatenated output)."""
        return self.generator.parse()

    def clean(self) -> CleanResult:
        """Remove every generated stylesheet whose source still exists."""
        return self.cleaner.clean()
