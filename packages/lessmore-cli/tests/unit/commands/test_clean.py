"""Tests for the lessmore clean command."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from lessmore_cli.commands.clean import clean_cmd
from lessmore_cli.commands.parse import parse_cmd
from lessmore_core.compiler import preprocessor as preprocessor_module

MakeProject = Callable[[dict[str, str]], Path]

OUT = Path("public/stylesheets")


class TestCleanCommand:
    """Tests for clean command."""

    @pytest.mark.usefixtures("fake_lessc")
    def test_removes_generated_files(
        self, isolated_runner: CliRunner, make_project: MakeProject
    ) -> None:
        """Test generated files are removed and others are kept."""
        make_project({"app/stylesheets/screen.less": "", "app/stylesheets/sub/print.lss": ""})
        assert isolated_runner.invoke(parse_cmd, ["--concat", "all"]).exit_code == 0
        (OUT / "vendor.css").write_text("keep")

        result = isolated_runner.invoke(clean_cmd, [])

        assert result.exit_code == 0, result.output
        assert "Removed 2 generated stylesheet(s)" in result.output
        assert not (OUT / "screen.css").exists()
        assert not (OUT / "sub" / "print.css").exists()
        assert (OUT / "vendor.css").exists()
        assert (OUT / "all.css").exists()

    def test_does_not_need_lessc(
        self,
        isolated_runner: CliRunner,
        make_project: MakeProject,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test clean runs without the LESS compiler installed."""
        monkeypatch.setattr(preprocessor_module.shutil, "which", lambda command: None)
        make_project({"app/stylesheets/screen.less": "", "public/stylesheets/screen.css": ""})

        result = isolated_runner.invoke(clean_cmd, [])

        assert result.exit_code == 0, result.output
        assert not (OUT / "screen.css").exists()

    def test_idempotent(self, isolated_runner: CliRunner, make_project: MakeProject) -> None:
        """Test cleaning twice succeeds."""
        make_project({"app/stylesheets/screen.less": "", "public/stylesheets/screen.css": ""})

        assert isolated_runner.invoke(clean_cmd, []).exit_code == 0
        second = isolated_runner.invoke(clean_cmd, [])
        assert second.exit_code == 0
        assert "Removed 0 generated stylesheet(s)" in second.output

    def test_custom_destination(
        self, isolated_runner: CliRunner, make_project: MakeProject
    ) -> None:
        """Test destination options select what is cleaned."""
        make_project({"app/stylesheets/screen.less": "", "www/css/screen.css": ""})

        result = isolated_runner.invoke(
            clean_cmd, ["--destination-root", "www", "--destination-path", "css"]
        )

        assert result.exit_code == 0, result.output
        assert not Path("www/css/screen.css").exists()
