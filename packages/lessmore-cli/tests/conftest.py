"""Shared test fixtures for lessmore-cli tests.

Provides CliRunner fixtures, a project directory helper and a fake lessc
so commands can run without Node.js installed.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from lessmore_core.compiler import preprocessor as preprocessor_module

# Output of the fake lessc for every accepted source
FAKE_CSS = "body {\n  color: red;\n}\n"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Send structlog output to stderr so stdout stays clean for CSS."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clear_profile_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test under the default profile unless it sets one."""
    monkeypatch.delenv("LESSMORE_ENV", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fake_css() -> str:
    """Return the CSS produced by the fake lessc."""
    return FAKE_CSS


@pytest.fixture
def fake_lessc(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Pretend lessc is installed and compiles every source to FAKE_CSS.

    Sources containing ``@error`` fail with a lessc-style parse error.

    Returns:
        List that records the argument vector of each invocation.
    """
    calls: list[list[str]] = []

    def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append(args)
        if "@error" in kwargs["input"]:
            return subprocess.CompletedProcess(
                args, 1, stdout="", stderr="ParseError: Unrecognised input in - on line 1\n"
            )
        return subprocess.CompletedProcess(args, 0, stdout=FAKE_CSS, stderr="")

    monkeypatch.setattr(preprocessor_module.shutil, "which", lambda command: f"/usr/bin/{command}")
    monkeypatch.setattr(preprocessor_module.subprocess, "run", fake_run)
    return calls


@pytest.fixture
def make_project(isolated_runner: CliRunner) -> Callable[[dict[str, str]], Path]:
    """Factory fixture that writes files relative to the isolated directory.

    Returns:
        Function taking ``{"app/stylesheets/screen.less": "..."}``.
    """

    def _create(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = Path(relative)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return Path.cwd()

    return _create
