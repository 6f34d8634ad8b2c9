"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from opsdash.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["list", "show", "search", "stats", "calendar", "run"]),
    (["list", "--help"], ["KIND", "--status", "--filter", "--search"]),
    (["show", "--help"], ["KIND", "ENTITY_ID"]),
    (["search", "--help"], ["QUERY"]),
    (["stats", "--help"], ["--brief"]),
    (["calendar", "--help"], ["--date"]),
    (["run", "--help"], ["SCRIPT"]),
]


@pytest.mark.usefixtures("_isolated_cwd")
@pytest.mark.parametrize(("args", "keywords"), HELP_COMMANDS, ids=lambda v: " ".join(v))
def test_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    for keyword in keywords:
        assert keyword in result.output
    assert "--examples" in result.output or args == ["--help"]
