"""Command: dataset validation report."""

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
  chronolane check timeline.yaml
  chronolane --json check timeline.json
  chronolane -v --log-json check timeline.toml 2> trace.jsonl""",
)
@click.argument("dataset", type=click.Path(path_type=Path))
@click.option("--strict", is_flag=True, help="Exit 1 when any item was dropped or clamped.")
@click.pass_obj
def check(app: AppContext, dataset: Path, strict: bool) -> None:
    """Validate DATASET and list every dropped or clamped item."""
    result = app.layout_service().check(dataset)
    app.emit(result)
    if strict and result.data.get("issues"):
        raise SystemExit(1)
