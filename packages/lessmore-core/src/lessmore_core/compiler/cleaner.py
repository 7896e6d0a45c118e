"""Removal of previously generated stylesheets."""

from __future__ import annotations

from pathlib import Path

import structlog

from lessmore_core.compiler.batch import discover_sources
from lessmore_core.compiler.models import CleanResult
from lessmore_core.compiler.writer import OUTPUT_SUFFIX
from lessmore_core.errors import FilesystemError
from lessmore_core.schemas import StylesheetConfig

logger = structlog.get_logger(__name__)


class Cleaner:
    """Deletes the output file of every currently discovered source.

    Uses the same traversal as BatchGenerator, so only outputs whose source
    still exists are removed. The concatenated output and unrelated files are
    left alone. Running it twice is a no-op the second time.
    """

    def __init__(self, config: StylesheetConfig) -> None:
        self.config = config
        self.destination_dir = config.destination_dir
        self._log = logger.bind(component="cleaner")

    def destination_for(self, source_path: Path) -> Path:
        """Map a source path to its generated output path."""
        relative = source_path.relative_to(self.config.source_path)
        return self.destination_dir / relative.with_suffix(OUTPUT_SUFFIX)

    def clean(self) -> CleanResult:
        """Remove generated outputs.

        Raises:
            FilesystemError: If an existing output cannot be deleted.
        """
        removed: list[Path] = []
        missing: list[Path] = []

        for source in discover_sources(self.config):
            target = self.destination_for(source.path)
            if not target.is_file():
                missing.append(target)
                continue
            try:
                target.unlink()
            except FileNotFoundError:
                missing.append(target)
                continue
            except OSError as exc:
                raise FilesystemError(target, "delete", exc.strerror or str(exc)) from exc
            removed.append(target)

        self._log.info("clean_completed", removed=len(removed), missing=len(missing))
        return CleanResult(removed=removed, missing=missing)
