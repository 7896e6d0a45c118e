"""Compiler adapter: source file to CSS text."""

from __future__ import annotations

import structlog

from lessmore_core.compiler.models import SOURCE_ENCODING, SOURCE_ERRORS, SourceFile
from lessmore_core.compiler.preprocessor import Preprocessor
from lessmore_core.errors import FilesystemError

logger = structlog.get_logger(__name__)


class CompilerAdapter:
    """Turn a SourceFile into CSS text.

    Plain .css sources are returned byte-for-byte (decoded as UTF-8, line
    endings untouched). Everything else goes through the preprocessor.
    Bytes that are not valid UTF-8 are carried as surrogate escapes, so
    OutputWriter writes them back unchanged.
    """

    def __init__(self, preprocessor: Preprocessor) -> None:
        self.preprocessor = preprocessor

    def read(self, source: SourceFile) -> str:
        """Read the raw source text.

        Raises:
            FilesystemError: If the file cannot be read.
        """
        try:
            return source.path.read_bytes().decode(SOURCE_ENCODING, errors=SOURCE_ERRORS)
        except OSError as exc:
            raise FilesystemError(source.path, "read", exc.strerror or str(exc)) from exc

    def compile(self, source: SourceFile) -> str:
        """Compile a source file to CSS.

        Raises:
            CompileError: If the preprocessor rejects the source.
            FilesystemError: If the file cannot be read.
        """
        text = self.read(source)
        if source.is_passthrough:
            return text
        css = self.preprocessor.transform(text, source.path)
        logger.debug("source_compiled", source=str(source.path), size=len(css))
        return css
