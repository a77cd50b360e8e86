"""Command: resolve the display domain and year ticks."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chronolane.commands._base import ChronoCommand

if TYPE_CHECKING:
    from chronolane.commands._context import AppContext


@click.command(
    "domain",
    cls=ChronoCommand,
    examples="""\
  chronolane domain timeline.yaml
  chronolane domain timeline.yaml --pad-months 0
  chronolane --json domain timeline.toml""",
)
@click.argument("dataset", type=click.Path(path_type=Path))
@click.option(
    "--px-per-month",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Horizontal pixels per month.",
)
@click.option(
    "--pad-months",
    type=click.IntRange(min=0),
    default=None,
    help="Months of padding before and after the year-aligned domain.",
)
@click.pass_obj
def domain_cmd(
    app: AppContext,
    dataset: Path,
    px_per_month: float | None,
    pad_months: int | None,
) -> None:
    """Show the padded date range of DATASET and where each year starts."""
    svc = app.layout_service(pixels_per_month=px_per_month, pad_months=pad_months)
    app.emit(svc.domain(dataset))
