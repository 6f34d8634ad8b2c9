"""Click base classes for opsdash commands.

``OpsCommand`` and ``OpsGroup`` take an ``examples`` string. Passing
``--examples`` on the command line prints it and exits, so ``--help``
stays short. ``OpsGroup`` lists subcommands in registration order, which
follows the dashboard's sidebar rather than the alphabet.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_callback(examples: str) -> Any:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return show


def _attach_examples(cmd: click.Command, examples: str) -> None:
    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_examples_callback(examples),
            help="Show usage examples.",
        )
    )


class OpsCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)


class OpsGroup(click.Group):
    """Group whose subcommands default to :class:`OpsCommand`."""

    command_class = OpsCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)
