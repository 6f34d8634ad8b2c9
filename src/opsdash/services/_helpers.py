"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for the event log)."""
    return datetime.now(UTC).isoformat()


def contains_ci(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test. ``None`` never matches.

    Examples:
        >>> contains_ci("Smith Enterprises", "smith")
        True
        >>> contains_ci(None, "x")
        False
    """
    if haystack is None:
        return False
    return needle.casefold() in haystack.casefold()
