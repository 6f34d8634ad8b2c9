"""Standalone command: dashboard overview."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.services.stats import StatsService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext


@click.command(
    cls=OpsCommand,
    examples="""\
  opsdash stats
  opsdash stats --brief
  opsdash --json stats""",
)
@click.option("--brief", is_flag=True, help="Headline numbers only, no overview panels.")
@click.pass_obj
def stats(app: AppContext, brief: bool) -> None:
    """Show dashboard stats, recent projects, contracts, and deadlines."""
    svc = StatsService(app.workspace)
    app.emit(svc.summary() if brief else svc.overview())
