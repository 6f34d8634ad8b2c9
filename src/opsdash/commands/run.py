"""Standalone command: run a scripted session."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from opsdash.commands._base import OpsCommand
from opsdash.services.script import ScriptService

if TYPE_CHECKING:
    from opsdash.commands._context import AppContext


@click.command(
    cls=OpsCommand,
    examples="""\
  opsdash run session.json
  opsdash --no-seed run session.json
  cat session.json | opsdash --json run -

  session.json:
  [
    {"op": "draft", "kind": "contract", "fields": {"title": "Site", "description": "Build"}},
    {"op": "milestone", "fields": {"title": "Design", "description": "d", "amount": 500}},
    {"op": "milestone", "fields": {"title": "Build", "description": "b", "amount": 1500}},
    {"op": "finalize"},
    {"op": "type", "query": "Jo"},
    {"op": "type", "query": "Johnson"},
    {"op": "wait", "ms": 300}
  ]""",
)
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.pass_context
def run(ctx: click.Context, script: IO[str]) -> None:
    """Replay a JSON list of operations in one in-memory session.

    Exits with status 1 if any step failed.
    """
    app: AppContext = ctx.obj
    try:
        raw = json.load(script)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {script.name}: {exc}"
        raise click.ClickException(msg) from exc

    result = ScriptService(app.workspace).run(raw)
    app.emit(result)
    if result.data.get("failed"):
        ctx.exit(1)
