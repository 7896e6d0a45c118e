"""Shared pipeline options for lessmore commands."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from lessmore_core import StylesheetCompiler, StylesheetConfig


@dataclass
class PipelineOptions:
    """Grouped configuration options common to every command.

    None means "not given on the command line", so the value falls through
    to lessmore.yaml and then to the profile defaults.
    """

    config_file: Path | None
    env: str | None
    source: Path | None
    destination_root: Path | None
    destination_path: str | None
    concat: str | None
    compress: bool | None
    header: bool | None
    exclude_partials: bool | None
    lessc: str
    timeout: float | None

    def resolve_config(self, **overrides: Any) -> StylesheetConfig:
        """Resolve the StylesheetConfig through the profile override chain.

        Raises:
            ConfigurationError: If the config file is malformed.
            pydantic.ValidationError: If a value is invalid.
        """
        from lessmore_core import ProfileResolver

        resolver = ProfileResolver(profile=self.env, config_file=self.config_file)
        return resolver.resolve(
            source_path=self.source,
            destination_root=self.destination_root,
            destination_path=self.destination_path,
            concat=self.concat,
            compression=self.compress,
            header=self.header,
            exclude_partials=self.exclude_partials,
            **overrides,
        )

    def build_compiler(self, **overrides: Any) -> StylesheetCompiler:
        """Build a StylesheetCompiler backed by lessc.

        Raises:
            PreprocessorUnavailableError: If lessc cannot be found.
        """
        from lessmore_core import LesscPreprocessor, StylesheetCompiler

        config = self.resolve_config(**overrides)
        return StylesheetCompiler(config, LesscPreprocessor(self.lessc, timeout=self.timeout))


_OPTIONS: list[Callable[[Callable[..., Any]], Callable[..., Any]]] = [
    click.option(
        "-c",
        "--config",
        "config_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Path to lessmore.yaml [default: ./lessmore.yaml if present]",
    ),
    click.option(
        "-e",
        "--env",
        type=str,
        default=None,
        help="Deployment profile (production, development) [default: $LESSMORE_ENV]",
    ),
    click.option(
        "--source",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Stylesheet source root [default: app/stylesheets]",
    ),
    click.option(
        "--destination-root",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Public directory for generated CSS [default: public]",
    ),
    click.option(
        "--destination-path",
        type=str,
        default=None,
        help="Sub-directory of the destination root [default: stylesheets]",
    ),
    click.option(
        "--concat",
        type=str,
        default=None,
        help="Also write all generated CSS into <NAME>.css",
    ),
    click.option(
        "--compress/--no-compress",
        "compress",
        default=None,
        help="Remove newlines from generated CSS",
    ),
    click.option(
        "--header/--no-header",
        "header",
        default=None,
        help="Prepend the auto-generated banner",
    ),
    click.option(
        "--exclude-partials/--include-partials",
        "exclude_partials",
        default=None,
        help="Skip _partial sources during batch discovery",
    ),
    click.option(
        "--lessc",
        type=str,
        default="lessc",
        show_default=True,
        help="LESS compiler executable",
    ),
    click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Per-file compile timeout in seconds",
    ),
]

_OPTION_NAMES = frozenset(f.name for f in fields(PipelineOptions))


def pipeline_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the shared options and pass them as ``options=PipelineOptions(...)``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        grouped = {name: kwargs.pop(name) for name in _OPTION_NAMES}
        return func(*args, options=PipelineOptions(**grouped), **kwargs)

    for option in reversed(_OPTIONS):
        wrapper = option(wrapper)
    return wrapper
