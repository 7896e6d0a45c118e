"""lessmore generate command - Compile a single stylesheet."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from lessmore_cli.errors import EXIT_SYSTEM_ERROR, CLIError, handle_pipeline_error
from lessmore_cli.options import PipelineOptions, pipeline_options
from lessmore_cli.output import success


@click.command("generate")
@click.argument("logical_path")
@pipeline_options
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the CSS to a file instead of stdout",
)
@click.option(
    "--strict/--no-strict",
    "strict",
    default=None,
    help="Fail when several extensions match the logical path",
)
def generate_cmd(
    logical_path: str,
    options: PipelineOptions,
    output_path: Path | None,
    strict: bool | None,
) -> None:
    """Compile one stylesheet, addressed by its extension-free logical path.

    Partials (names starting with `_`) are not served.

    Examples:

        lessmore generate screen

        lessmore generate sub/dir/homepage --env development

        lessmore generate screen -o public/screen.css
    """
    from lessmore_core import SourceNotFoundError
    from lessmore_core.compiler import to_logical_path
    from lessmore_core.compiler.models import SOURCE_ENCODING, SOURCE_ERRORS

    try:
        segments = to_logical_path(logical_path)
    except ValueError as e:
        raise CLIError(str(e)) from None

    try:
        compiler = options.build_compiler(strict_resolution=strict)
        if not compiler.exists(segments):
            raise SourceNotFoundError(segments)
        css = compiler.generate(segments)
    except Exception as e:
        handle_pipeline_error(e)

    if output_path is None:
        click.echo(css.encode(SOURCE_ENCODING, SOURCE_ERRORS), nl=False)
        return

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(css.encode(SOURCE_ENCODING, SOURCE_ERRORS))
    except OSError as e:
        raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from e
    success(f"Generated {escape(str(output_path))}")
