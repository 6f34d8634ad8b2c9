"""Rich Console factory and theme for opsdash output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

OPS_THEME = Theme(
    {
        "ops.ok": "bold green",
        "ops.error": "bold red",
        "ops.warning": "bold yellow",
        "ops.op": "bold cyan",
        "ops.key": "dim",
        "ops.id": "bold blue",
        "ops.title": "bold",
        "ops.money": "green",
        "ops.unknown": "italic dim",
        "ops.status.active": "green",
        "ops.status.working": "yellow",
        "ops.status.closed": "dim",
        "ops.status.onboard": "green",
        "ops.status.postponed": "yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "Active": "ops.status.active",
    "Working": "ops.status.working",
    "Closed": "ops.status.closed",
    "Onboard": "ops.status.onboard",
    "Postponed": "ops.status.postponed",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=OPS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a project or intern status."""
    return _STATUS_STYLES.get(status, "")
