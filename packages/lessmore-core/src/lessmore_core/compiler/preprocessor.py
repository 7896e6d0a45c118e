"""Pluggable stylesheet preprocessors.

A preprocessor turns LESS source text into CSS text. The pipeline only
depends on the Preprocessor protocol, so the external ``lessc`` compiler can
be replaced by any callable (tests use a stub).
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from lessmore_core.compiler.models import SOURCE_ENCODING, SOURCE_ERRORS
from lessmore_core.errors import CompileError, PreprocessorUnavailableError

logger = structlog.get_logger(__name__)

# Default external compiler executable
DEFAULT_LESSC_COMMAND = "lessc"


@runtime_checkable
class Preprocessor(Protocol):
    """Capability that compiles stylesheet source text to CSS.

    Implementations raise CompileError when the source is rejected.
    """

    def transform(self, source: str, path: Path) -> str:
        """Compile source text read from ``path`` into CSS."""
        ...


class LesscPreprocessor:
    """Compile LESS with the ``lessc`` command line compiler.

    The source is fed on stdin and the source's directory is passed as an
    include path so ``@import "_partial"`` works.

    Attributes:
        executable: Absolute path of the lessc binary.
        timeout: Seconds before a compile is abandoned, or None.
        extra_args: Additional arguments passed to lessc.

    Example:
        >>> preprocessor = LesscPreprocessor(timeout=30)
        >>> preprocessor.transform("a { b { color: red; } }", Path("x.less"))
        'a b {\\n  color: red;\\n}\\n'
    """

    def __init__(
        self,
        command: str = DEFAULT_LESSC_COMMAND,
        *,
        timeout: float | None = None,
        extra_args: Sequence[str] = (),
    ) -> None:
        """Initialize LesscPreprocessor.

        Args:
            command: Executable name or path.
            timeout: Per-file timeout in seconds.
            extra_args: Additional lessc arguments.

        Raises:
            PreprocessorUnavailableError: If the executable cannot be found.
        """
        executable = shutil.which(command)
        if executable is None:
            raise PreprocessorUnavailableError(command)
        self.executable = executable
        self.timeout = timeout
        self.extra_args = tuple(extra_args)

    def transform(self, source: str, path: Path) -> str:
        logger.debug("lessc_invoked", source=str(path), executable=self.executable)
        args = [
            self.executable,
            f"--include-path={path.parent}",
            *self.extra_args,
            "-",
        ]
        try:
            completed = subprocess.run(
                args,
                input=source,
                capture_output=True,
                text=True,
                encoding=SOURCE_ENCODING,
                errors=SOURCE_ERRORS,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise CompileError(path, f"lessc timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise CompileError(path, f"could not run lessc: {exc}") from exc

        if completed.returncode != 0:
            message = completed.stderr.strip() or f"lessc exited with status {completed.returncode}"
            raise CompileError(
                path,
                message.splitlines()[0],
                internal_details=message,
            )
        return completed.stdout


class FunctionPreprocessor:
    """Adapt a plain ``str -> str`` callable to the Preprocessor protocol.

    Any exception raised by the callable becomes a CompileError.

    Example:
        >>> stub = FunctionPreprocessor(lambda source: "body {\\n  color: red;\\n}\\n")
    """

    def __init__(self, func: Callable[[str], str]) -> None:
        self.func = func

    def transform(self, source: str, path: Path) -> str:
        try:
            return self.func(source)
        except CompileError:
            raise
        except Exception as exc:
            raise CompileError(path, str(exc) or exc.__class__.__name__) from exc
