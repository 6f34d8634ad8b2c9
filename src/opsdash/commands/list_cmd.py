"""Standalone command: section listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.services.entities import EntityService
from opsdash.services.search import SearchService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext

KIND_CHOICES = ["clients", "projects", "team", "interns", "contracts"]


@click.command(
    "list",
    cls=OpsCommand,
    examples="""\
  opsdash list clients
  opsdash list clients --filter smith
  opsdash list projects --status Working
  opsdash list interns --status Postponed --filter design
  opsdash list contracts --filter "mobile"
  opsdash list projects --search johnson
  opsdash -q list team""",
)
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.option(
    "--status",
    default=None,
    help="Status tab (projects: Active/Working/Closed; interns: Onboard/Postponed).",
)
@click.option("--filter", "text", default=None, help="Section text filter.")
@click.option("--search", "query", default=None, help="Apply a global search first.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    kind: str,
    status: str | None,
    text: str | None,
    query: str | None,
) -> None:
    """List the records of one dashboard section."""
    ws = app.workspace
    if query is not None:
        SearchService(ws).search(query)
    app.emit(EntityService(ws).list_items(kind, status=status, text=text))
