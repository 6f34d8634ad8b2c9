"""Standalone command: calendar events."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.services.calendar import CalendarService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext


@click.command(
    "calendar",
    cls=OpsCommand,
    examples="""\
  opsdash calendar
  opsdash calendar --date 2023-08-15
  opsdash --json calendar --date 2023-06-30""",
)
@click.option(
    "--date",
    "day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Only events on this day (YYYY-MM-DD).",
)
@click.pass_obj
def calendar_cmd(app: AppContext, day: datetime | None) -> None:
    """List project deadlines and milestone due dates."""
    selected = day.date() if day is not None else None
    app.emit(CalendarService(app.workspace).calendar(selected))
