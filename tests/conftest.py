"""Shared pytest fixtures and test helpers for opsdash tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from opsdash.config.settings import OpsSettings
from opsdash.domain.drafts import MilestoneDraft
from opsdash.domain.ids import IdGenerator
from opsdash.infrastructure.scheduler import ManualScheduler
from opsdash.infrastructure.workspace import Workspace
from opsdash.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _reset_ambient_state() -> Iterator[None]:
    """Undo logging and telemetry setup done by CLI invocations."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    ops_level = logging.getLogger("opsdash").level
    try:
        yield
    finally:
        disable_telemetry()
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("opsdash").setLevel(ops_level)
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty directory with no opsdash config in reach."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPSDASH_CONFIG", raising=False)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> OpsSettings:
    """Default settings, isolated from any config file on the machine."""
    monkeypatch.delenv("OPSDASH_CONFIG", raising=False)
    return OpsSettings.from_cli(start_dir=tmp_path)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def workspace(settings: OpsSettings, scheduler: ManualScheduler) -> Workspace:
    """Workspace seeded with the built-in sample dataset on a virtual clock."""
    return Workspace(settings, scheduler=scheduler, load_plugins=False)


@pytest.fixture
def empty_workspace(settings: OpsSettings, scheduler: ManualScheduler) -> Workspace:
    """Workspace with five empty collections."""
    from opsdash.domain.seed import empty_seed

    return Workspace(settings, seed=empty_seed(), scheduler=scheduler, load_plugins=False)


@pytest.fixture
def ids() -> IdGenerator:
    return IdGenerator(seed=1234)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def milestone_input(title: str, amount: Any, **fields: Any) -> MilestoneDraft:
    """A complete milestone input with *title* and *amount*."""
    values: dict[str, Any] = {
        "title": title,
        "description": f"{title} phase",
        "due_date": date(2024, 6, 1),
        "amount": amount,
    }
    values.update(fields)
    return MilestoneDraft().set(**values)


def client_fields(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "555-000-0000",
        "company": "Analytical Engines",
        "address": "1 Babbage Way",
    }
    fields.update(overrides)
    return fields


def money(value: int | str) -> Decimal:
    return Decimal(value)
