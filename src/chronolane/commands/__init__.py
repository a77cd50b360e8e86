"""Subcommand modules for chronolane.

Provides register_commands() which uses deferred imports so that
``chronolane --help`` never loads the layout engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from chronolane.commands.check import check
    from chronolane.commands.domain_cmd import domain_cmd
    from chronolane.commands.layout import layout

    cli.add_command(layout)
    cli.add_command(domain_cmd)
    cli.add_command(check)
