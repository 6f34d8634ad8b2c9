"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Workspace initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click
import pydantic

from opsdash.domain.errors import OpsdashError
from opsdash.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from opsdash.config.settings import OpsSettings
    from opsdash.infrastructure.workspace import Workspace
    from opsdash.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The workspace is
    lazily built on first use so ``--help`` and ``--version`` never load
    seed data or plugins.
    """

    def __init__(self, settings: OpsSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from opsdash.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            workspace=settings.workspace.name,
        )

        if settings.verbose:
            from opsdash.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The session workspace (created lazily on first access)."""
        if self._workspace is None:
            from opsdash.infrastructure.workspace import Workspace

            try:
                self._workspace = Workspace(self.settings)
            except (OSError, json.JSONDecodeError) as exc:
                msg = f"Cannot read seed data: {exc}"
                raise click.ClickException(msg) from exc
            except pydantic.ValidationError as exc:
                msg = f"Invalid seed data: {exc}"
                raise click.ClickException(msg) from exc
            except OpsdashError as exc:
                msg = f"Invalid seed data: {exc.message}"
                raise click.ClickException(msg) from exc
        return self._workspace

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
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
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
