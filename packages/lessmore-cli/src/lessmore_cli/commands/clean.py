"""lessmore clean command - Remove generated stylesheets."""

from __future__ import annotations

import click
from rich.markup import escape

from lessmore_cli.errors import handle_pipeline_error
from lessmore_cli.options import PipelineOptions, pipeline_options
from lessmore_cli.output import info, success


@click.command("clean")
@pipeline_options
def clean_cmd(options: PipelineOptions) -> None:
    """Remove the generated CSS file of every current source.

    Files with no corresponding source, and the concatenated file, are left
    untouched. The LESS compiler is not needed.

    Examples:

        lessmore clean

        lessmore clean --destination-root build/public
    """
    from lessmore_core.compiler import Cleaner

    try:
        result = Cleaner(options.resolve_config()).clean()
    except Exception as e:
        handle_pipeline_error(e)

    for path in result.removed:
        info(f"  removed {escape(str(path))}")
    success(f"Removed {len(result.removed)} generated stylesheet(s)")
