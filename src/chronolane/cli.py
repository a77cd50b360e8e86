"""chronolane entry point: global flags, settings and command registration."""

from __future__ import annotations

from typing import Any

import click

from chronolane import __version__
from chronolane.commands import register_commands
from chronolane.commands._context import AppContext
from chronolane.config.settings import ChronoSettings


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chronolane")
@click.option("--json", "json_output", is_flag=True, help="Print the raw result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Only item ids or the status line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this chronolane.toml instead of searching upward from the cwd.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: Any) -> None:
    """chronolane — lane-based timeline layout engine.

    Reads a dataset of dated items (JSON, TOML or YAML) and computes
    absolute coordinates for every bar, point, label and year gridline.
    """
    ctx.obj = AppContext(ChronoSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
