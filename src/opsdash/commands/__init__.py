"""Subcommand modules for opsdash.

Provides register_commands() which uses deferred imports to keep
``opsdash --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from opsdash.commands.calendar_cmd import calendar_cmd
    from opsdash.commands.list_cmd import list_cmd
    from opsdash.commands.run import run
    from opsdash.commands.search import search
    from opsdash.commands.show import show
    from opsdash.commands.stats import stats

    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(search)
    cli.add_command(stats)
    cli.add_command(calendar_cmd)
    cli.add_command(run)
