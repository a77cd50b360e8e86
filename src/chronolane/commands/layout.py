"""Command: build the layout model for a dataset."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chronolane.commands._base import ChronoCommand

if TYPE_CHECKING:
    from chronolane.commands._context import AppContext


@click.command(
    cls=ChronoCommand,
    examples="""\
  chronolane layout timeline.yaml
  chronolane layout timeline.yaml --output build/layout.json
  chronolane layout timeline.toml --px-per-month 14 --pad-months 0
  chronolane layout timeline.json --auto-rails
  chronolane --json layout timeline.yaml | jq '.data.layout.primitives'""",
)
@click.argument("dataset", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the layout model JSON to this file.",
)
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
@click.option(
    "--auto-rails",
    is_flag=True,
    default=None,
    help="Reassign rails greedily so overlapping items do not share one.",
)
@click.pass_obj
def layout(
    app: AppContext,
    dataset: Path,
    output: Path | None,
    px_per_month: float | None,
    pad_months: int | None,
    auto_rails: bool | None,
) -> None:
    """Compute lane geometry and primitives for DATASET."""
    svc = app.layout_service(
        pixels_per_month=px_per_month,
        pad_months=pad_months,
        auto_rails=auto_rails or None,
    )
    app.emit(svc.build(dataset, output=output))
