"""Batch generation of every stylesheet under the source root.

Traversal order is the sorted order of source paths (compared segment by
segment). That order governs writes and the concatenated output, including
when compilation runs on a worker pool. Files and directories whose name
starts with "." are not traversed.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import UTC, datetime
from functools import partial
from pathlib import Path

import structlog

from lessmore_core.compiler.adapter import CompilerAdapter
from lessmore_core.compiler.models import (
    SOURCE_EXTENSIONS,
    AssetResult,
    AssetStatus,
    BatchResult,
    CompiledAsset,
    LogicalPath,
    SourceFile,
)
from lessmore_core.compiler.path_resolver import PathResolver
from lessmore_core.compiler.postprocessor import PostProcessor
from lessmore_core.compiler.writer import OutputWriter
from lessmore_core.errors import BatchError, CompileError
from lessmore_core.schemas import StylesheetConfig

logger = structlog.get_logger(__name__)

# A compiled asset, or the CompileError raised while producing it
Outcome = CompiledAsset | CompileError


def discover_sources(config: StylesheetConfig) -> list[SourceFile]:
    """Enumerate every source file under the source root, sorted by path.

    Hidden files, and anything below a hidden directory, are skipped. When
    several extensions share one logical path only the one PathResolver
    would choose is kept, so a batch run writes what generate() serves.
    Partials are included unless ``config.exclude_partials`` is set, unlike
    PathResolver.exists() which always rejects them.
    """
    root = config.source_path
    if not root.is_dir():
        logger.warning("source_root_missing", source_path=str(root))
        return []

    chosen: dict[Path, SourceFile] = {}
    for path in root.rglob("*"):
        if path.suffix[1:] not in SOURCE_EXTENSIONS or not path.is_file():
            continue
        if any(part.startswith(".") for part in path.relative_to(root).parts):
            continue
        source = SourceFile.from_path(path)
        key = path.with_suffix("")
        current = chosen.get(key)
        if current is not None and _precedence(current) <= _precedence(source):
            logger.debug("source_shadowed", chosen=str(current.path), ignored=str(path))
            continue
        chosen[key] = source

    sources = sorted(chosen.values(), key=lambda source: source.path)
    if config.exclude_partials:
        sources = [source for source in sources if not source.is_partial]
    return sources


class BatchGenerator:
    """Discovers sources and drives compile, post-process and write for each.

    Fail-fast is the default: the first CompileError aborts the run, nothing
    already written is rolled back and later sources are never attempted.
    With ``config.keep_going`` every source is attempted and a BatchError
    listing the failures is raised at the end.

    Attributes:
        config: Pipeline configuration.

    Example:
        >>> generator = BatchGenerator(config, resolver, adapter, post, writer)
        >>> result = generator.parse()
        >>> [a.destination for a in result.written]
    """

    def __init__(
        self,
        config: StylesheetConfig,
        resolver: PathResolver,
        adapter: CompilerAdapter,
        postprocessor: PostProcessor,
        writer: OutputWriter,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.adapter = adapter
        self.postprocessor = postprocessor
        self.writer = writer
        self._log = logger.bind(component="batch_generator")

    def discover_sources(self) -> list[SourceFile]:
        """Enumerate every source file under the source root, sorted by path."""
        return discover_sources(self.config)

    def logical_path_for(self, source: SourceFile) -> LogicalPath:
        """Derive a source's logical path from its location under the source root."""
        relative = source.path.relative_to(self.config.source_path)
        return (*relative.parts[:-1], relative.stem)

    def build(self, source: SourceFile) -> CompiledAsset:
        """Compile and post-process a single source.

        Plain .css sources skip post-processing unless
        ``config.postprocess_css`` is set.

        Raises:
            CompileError: If the preprocessor rejects the source.
            FilesystemError: If the source cannot be read.
        """
        css = self.adapter.compile(source)
        if not source.is_passthrough or self.config.postprocess_css:
            css = self.postprocessor.apply(css, source)
        return CompiledAsset(css=css, source=source)

    def generate(self, logical_path: str | Sequence[str]) -> str:
        """Generate the CSS for one logical path without writing it.

        Raises:
            SourceNotFoundError: If no source matches.
            CompileError: If the preprocessor rejects the source.
        """
        return self.build(self.resolver.resolve(logical_path)).css

    def parse(self) -> BatchResult:
        """Generate every discovered source, then the concatenated output.

        Returns:
            BatchResult with one entry per attempted source, in traversal order.

        Raises:
            CompileError: On the first failure (default fail-fast mode).
            BatchError: After the run if any source failed (keep-going mode).
            FilesystemError: If any write fails, in either mode.
            AmbiguousSourceError: Before anything is written, if strict
                resolution is on and a logical path matches several sources.
        """
        start_time = time.monotonic()
        started_at = datetime.now(UTC)
        sources = [
            self.resolver.resolve(self.logical_path_for(source))
            for source in self.discover_sources()
        ]

        self._log.info(
            "batch_started",
            sources=len(sources),
            workers=self.config.workers,
            keep_going=self.config.keep_going,
            concat=self.config.concat,
        )

        if self.config.workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(
                max_workers=self.config.workers,
                thread_name_prefix="lessmore",
            ) as pool:
                futures = [pool.submit(self.build, source) for source in sources]
                try:
                    assets, accumulator = self._write_in_order(
                        sources, (_outcome(future.result) for future in futures)
                    )
                except Exception:
                    _cancel(futures)
                    raise
        else:
            assets, accumulator = self._write_in_order(
                sources, (_outcome(partial(self.build, source)) for source in sources)
            )

        failed = [a for a in assets if a.status == AssetStatus.FAILED]
        concat_destination = None
        if self.config.concat:
            if failed:
                self._log.warning(
                    "concat_skipped",
                    concat=self.config.concat,
                    failed=len(failed),
                )
            else:
                concat_destination = self.writer.write(self.config.concat, "".join(accumulator))

        result = BatchResult(
            assets=assets,
            concat_destination=concat_destination,
            started_at=started_at,
            finished_at=datetime.now(UTC),
            total_duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        self._log.info(
            "batch_completed",
            written=len(result.written),
            failed=len(failed),
            total_duration_ms=result.total_duration_ms,
        )

        if failed:
            raise BatchError(result)
        return result

    def _write_in_order(
        self,
        sources: Sequence[SourceFile],
        outcomes: Iterable[Outcome],
    ) -> tuple[list[AssetResult], list[str]]:
        """Consume outcomes in traversal order, writing each success.

        Outcomes are pulled lazily, so in sequential mode a source is not
        compiled until the previous one has been written.
        """
        assets: list[AssetResult] = []
        accumulator: list[str] = []

        for source, outcome in zip(sources, outcomes):
            logical_path = self.logical_path_for(source)

            if isinstance(outcome, CompileError):
                if not self.config.keep_going:
                    self._log.error(
                        "batch_aborted",
                        source=str(source.path),
                        written=len(assets),
                    )
                    raise outcome
                self._log.warning("source_failed", source=str(source.path), error=outcome.message)
                assets.append(
                    AssetResult(
                        logical_path=logical_path,
                        source=source.path,
                        status=AssetStatus.FAILED,
                        error=outcome.user_message,
                    )
                )
                continue

            destination = self.writer.write(logical_path, outcome.css)
            assets.append(
                AssetResult(
                    logical_path=logical_path,
                    source=source.path,
                    destination=destination,
                    status=AssetStatus.WRITTEN,
                )
            )
            if self.config.concat:
                accumulator.append(outcome.css)

        return assets, accumulator


def _precedence(source: SourceFile) -> int:
    return SOURCE_EXTENSIONS.index(source.extension)


def _outcome(call: Callable[[], CompiledAsset]) -> Outcome:
    try:
        return call()
    except CompileError as exc:
        return exc


def _cancel(futures: Iterable[Future[CompiledAsset]]) -> None:
    cancelled = sum(1 for future in futures if future.cancel())
    if cancelled:
        logger.debug("pending_compiles_cancelled", count=cancelled)

