"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click
import structlog

from chronolane.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from chronolane.config.settings import ChronoSettings
    from chronolane.services.layout import LayoutService
    from chronolane.services.result import ServiceResult

log = structlog.get_logger("chronolane.commands")


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ChronoSettings) -> None:
        self.settings = settings

        from chronolane.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from chronolane.services.telemetry import enable_telemetry

            enable_telemetry()

    def layout_service(self, **scale_overrides: Any) -> LayoutService:
        """A LayoutService over the effective config, with per-command scale flags applied."""
        from chronolane.services.layout import LayoutService

        return LayoutService(self.settings.with_scale(**scale_overrides).to_config())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr once, as plain
          lines or as log records under ``--log-json``.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON payloads already carry their warnings.
            if not settings.json_output:
                for warning in result.warnings:
                    if self.settings.log_json:
                        log.warning(warning, op=result.op)
                    else:
                        click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
