"""Output writer: place generated CSS under the destination directory."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from lessmore_core.compiler.models import SOURCE_ENCODING, SOURCE_ERRORS
from lessmore_core.errors import FilesystemError

logger = structlog.get_logger(__name__)

OUTPUT_SUFFIX = ".css"


class OutputWriter:
    """Writes CSS text to ``<destination_dir>/<segments>.css``.

    Existing files are overwritten unconditionally.

    Attributes:
        destination_dir: Root directory for generated files.
    """

    def __init__(self, destination_dir: Path) -> None:
        self.destination_dir = destination_dir

    def destination_for(self, target: str | Sequence[str]) -> Path:
        """Compute the output path for a logical path or a concat name.

        A string target is split on ``/``, so ``"bundles/all"`` lands in a
        sub-directory.
        """
        segments = target.split("/") if isinstance(target, str) else list(target)
        segments[-1] = segments[-1] + OUTPUT_SUFFIX
        return self.destination_dir.joinpath(*segments)

    def write(self, target: str | Sequence[str], css: str) -> Path:
        """Write CSS, creating intermediate directories.

        A trailing newline is appended unless the text already ends with one.

        Returns:
            The path written.

        Raises:
            FilesystemError: If a directory or the file cannot be written.
        """
        destination = self.destination_for(target)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                destination.parent, "create directory", exc.strerror or str(exc)
            ) from exc

        text = css if css.endswith("\n") else css + "\n"
        try:
            with destination.open(
                "w", encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS, newline=""
            ) as f:
                f.write(text)
        except OSError as exc:
            raise FilesystemError(destination, "write", exc.strerror or str(exc)) from exc

        logger.debug("asset_written", destination=str(destination), size=len(text))
        return destination
