"""Root CLI group for opsdash with global flags and command registration."""

from __future__ import annotations

import click

from opsdash import __version__
from opsdash.commands import register_commands
from opsdash.commands._base import OpsGroup
from opsdash.commands._context import AppContext
from opsdash.config.settings import OpsSettings


@click.group(cls=OpsGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="opsdash")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--no-seed", is_flag=True, help="Start with empty collections.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    no_seed: bool,
) -> None:
    """opsdash — operations dashboard for clients, projects, team, and contracts."""
    ctx.ensure_object(dict)
    settings = OpsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_seed=no_seed,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
