"""Standalone command: show one record."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.commands.list_cmd import KIND_CHOICES
from opsdash.services.entities import EntityService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext


@click.command(
    cls=OpsCommand,
    examples="""\
  opsdash show clients client1
  opsdash show contracts contract2
  opsdash --json show projects project4""",
)
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.argument("entity_id")
@click.pass_obj
def show(app: AppContext, kind: str, entity_id: str) -> None:
    """Show a record with its client, project, and team resolved."""
    app.emit(EntityService(app.workspace).get(kind, entity_id))
