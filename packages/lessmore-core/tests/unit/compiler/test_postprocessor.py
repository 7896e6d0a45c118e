"""Unit tests for post-processing."""

from __future__ import annotations

from pathlib import Path

import pytest

from lessmore_core.compiler.models import SourceFile
from lessmore_core.compiler.postprocessor import (
    HEADER_TEMPLATE,
    PostProcessor,
    compress,
    render_header,
)
from lessmore_core.schemas import StylesheetConfig

SOURCE = SourceFile.from_path(Path("app/stylesheets/screen.less"))
CSS = "body {\n  color: red;\n}\n"


class TestCompress:
    """Tests for compress()."""

    def test_removes_newlines(self) -> None:
        """Test every newline is deleted and nothing else changes."""
        assert compress(CSS) == "body {  color: red;}"

    def test_keeps_carriage_returns(self) -> None:
        """Test only LF characters are removed."""
        assert compress("a {\r\n}") == "a {\r}"

    @pytest.mark.parametrize("css", ["", CSS, "a\n\n\nb", "no newline"])
    def test_idempotent(self, css: str) -> None:
        """Test compressing twice equals compressing once."""
        assert compress(compress(css)) == compress(css)


class TestRenderHeader:
    """Tests for the header banner."""

    def test_names_source(self) -> None:
        """Test the banner names the source path."""
        header = render_header(Path("app/stylesheets/screen.less"))
        assert header.startswith("/*\n\n\n\n\n\tThis file was auto generated by Less")
        assert "edit app/stylesheets/screen.less instead." in header
        assert header.endswith("\n\n\n\n\n*/")

    def test_template(self) -> None:
        """Test the banner is the template with the source filled in."""
        assert render_header("x.less") == HEADER_TEMPLATE.format(source="x.less")


class TestPostProcessor:
    """Tests for PostProcessor.apply()."""

    def test_noop(self) -> None:
        """Test nothing changes with both options off."""
        assert PostProcessor(compression=False, header=False).apply(CSS, SOURCE) == CSS

    def test_header_only(self) -> None:
        """Test the banner is prepended directly to the CSS."""
        out = PostProcessor(compression=False, header=True).apply(CSS, SOURCE)
        assert out == render_header(SOURCE.path) + CSS

    def test_header_added_after_compression(self) -> None:
        """Test the banner keeps its newlines when compression is on."""
        out = PostProcessor(compression=True, header=True).apply(CSS, SOURCE)
        assert out == render_header(SOURCE.path) + "body {  color: red;}"
        assert out.count("\n") == render_header(SOURCE.path).count("\n")

    def test_from_config(self) -> None:
        """Test options are read from the config."""
        post = PostProcessor.from_config(StylesheetConfig(compression=False, header=True))
        assert post.compression is False
        assert post.header is True
