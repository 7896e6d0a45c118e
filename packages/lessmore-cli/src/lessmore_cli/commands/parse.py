"""lessmore parse command - Generate every stylesheet."""

from __future__ import annotations

import click
from rich.markup import escape

from lessmore_cli.errors import handle_pipeline_error
from lessmore_cli.options import PipelineOptions, pipeline_options
from lessmore_cli.output import info, success


@click.command("parse")
@pipeline_options
@click.option(
    "--keep-going/--fail-fast",
    "keep_going",
    default=None,
    help="Continue after a compile failure and report all failures [default: fail fast]",
)
@click.option(
    "-j",
    "--workers",
    type=click.IntRange(min=1, max=64),
    default=None,
    help="Compile stylesheets on N worker threads [default: 1]",
)
def parse_cmd(options: PipelineOptions, keep_going: bool | None, workers: int | None) -> None:
    """Generate CSS for every source under the source root.

    Writes `<destination-root>/<destination-path>/<relative path>.css` for
    each `.css`, `.less` and `.lss` source, plus the concatenated file when
    `--concat` is configured.

    Examples:

        lessmore parse

        lessmore parse --env development --concat all

        lessmore parse --keep-going --workers 4
    """
    try:
        compiler = options.build_compiler(keep_going=keep_going, workers=workers)
        result = compiler.parse()
    except Exception as e:
        handle_pipeline_error(e)

    for asset in result.written:
        info(f"  {escape(str(asset.source))} -> {escape(str(asset.destination))}")
    if result.concat_destination is not None:
        info(f"  (concat) -> {escape(str(result.concat_destination))}")
    success(f"Generated {len(result.written)} stylesheet(s) in {result.total_duration_ms}ms")
