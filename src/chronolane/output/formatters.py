"""Output mode dispatch for ServiceResult.

Humans get Rich renderers, scripts get ``--json``, and ``--quiet`` keeps
only the status line (or one item id per line for layouts).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chronolane.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from chronolane.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult according to *settings* (JSON > quiet > rich)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
