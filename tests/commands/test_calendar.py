"""Tests for `opsdash calendar`."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from opsdash.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


class TestCalendar:
    def test_day(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "calendar", "--date", "2023-07-20"])
        assert result.exit_code == 0
        events = json.loads(result.stdout)["data"]["events"]
        assert [e["title"] for e in events] == [
            "Project Deadline: Mobile App Development",
            "Milestone: Testing and App Store Submission",
        ]

    def test_all_events(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calendar"])
        assert result.exit_code == 0
        assert "All events" in result.output

    def test_bad_date(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calendar", "--date", "20/07/2023"])
        assert result.exit_code == 2
