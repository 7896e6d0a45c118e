"""lessmore config command - Show the resolved configuration."""

from __future__ import annotations

import click

from lessmore_cli.errors import handle_pipeline_error
from lessmore_cli.options import PipelineOptions, pipeline_options
from lessmore_cli.output import print_json


@click.command("config")
@pipeline_options
def config_cmd(options: PipelineOptions) -> None:
    """Print the resolved configuration as JSON.

    Shows the result of the override chain: profile defaults, then
    lessmore.yaml, then command line options.

    Examples:

        lessmore config

        LESSMORE_ENV=development lessmore config
    """
    try:
        config = options.resolve_config()
    except Exception as e:
        handle_pipeline_error(e)

    data = config.model_dump(mode="json")
    data["destination_dir"] = str(config.destination_dir)
    print_json(data)
