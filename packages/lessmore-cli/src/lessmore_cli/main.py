"""CLI entry point for lessmore.

This module defines the main CLI group using a LazyGroup so that
``lessmore --help`` does not import the pipeline.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from lessmore_cli import __version__
from lessmore_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"parse": "lessmore_cli.commands.parse.parse_cmd"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "parse": "lessmore_cli.commands.parse.parse_cmd",
    "clean": "lessmore_cli.commands.clean.clean_cmd",
    "generate": "lessmore_cli.commands.generate.generate_cmd",
    "config": "lessmore_cli.commands.config.config_cmd",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="lessmore")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug events.")
@click.option("--log-json", is_flag=True, default=False, help="Log events as JSON lines.")
def cli(verbose: bool, log_json: bool) -> None:
    """lessmore - Compile LESS stylesheet trees into CSS.

    Generates a parallel tree of CSS files from `app/stylesheets`, with
    optional compression, an auto-generated banner and concatenation.

    **Getting Started:**

    - `lessmore parse` - Generate every stylesheet
    - `lessmore generate screen` - Print one stylesheet
    - `lessmore clean` - Remove generated stylesheets
    - `lessmore config` - Show the resolved configuration
    """
    from lessmore_core.observability import configure_logging

    configure_logging(verbose=verbose, json_output=log_json)


if __name__ == "__main__":
    cli()
