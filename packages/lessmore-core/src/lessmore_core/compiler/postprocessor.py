"""Post-processing of generated CSS: compression, then header banner."""

from __future__ import annotations

from pathlib import Path

from lessmore_core.compiler.models import SourceFile
from lessmore_core.schemas import StylesheetConfig

HEADER_TEMPLATE = (
    "/*\n\n\n\n\n\tThis file was auto generated by Less (http://lesscss.org). "
    "To change the contents of this file, edit {source} instead.\n\n\n\n\n*/"
)


def compress(css: str) -> str:
    """Delete every newline character. Idempotent."""
    return css.replace("\n", "")


def render_header(source_path: Path | str) -> str:
    """Render the auto-generated banner for a source path."""
    return HEADER_TEMPLATE.format(source=source_path)


class PostProcessor:
    """Apply compression and the header banner, in that order.

    The banner is added after compression, so its own newlines survive.

    Example:
        >>> post = PostProcessor(compression=True, header=False)
        >>> post.apply("a {\\n  b: c;\\n}\\n", source)
        'a {  b: c;}'
    """

    def __init__(self, *, compression: bool, header: bool) -> None:
        self.compression = compression
        self.header = header

    @classmethod
    def from_config(cls, config: StylesheetConfig) -> PostProcessor:
        return cls(compression=config.compression, header=config.header)

    def apply(self, css: str, source: SourceFile) -> str:
        if self.compression:
            css = compress(css)
        if self.header:
            css = render_header(source.path) + css
        return css
