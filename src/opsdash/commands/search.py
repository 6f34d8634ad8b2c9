"""Standalone command: global search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.services.search import SearchService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext


@click.command(
    cls=OpsCommand,
    examples="""\
  opsdash search Johnson
  opsdash search "mobile app"
  opsdash -q search engineering
  opsdash --json search design""",
)
@click.argument("query")
@click.pass_obj
def search(app: AppContext, query: str) -> None:
    """Search clients, projects, team, interns, and contracts at once.

    The view focuses the first section with matches, in that order.
    """
    app.emit(SearchService(app.workspace).search(query))
