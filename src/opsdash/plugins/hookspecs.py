"""Pluggy hook specifications for opsdash completion signals.

Every successful mutation, search evaluation, and view transition emits
exactly one event. Payloads are plain JSON-ready values so plugins never
hold references into the store.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("opsdash")


class OpsdashHookSpec:
    """Hook specifications for the opsdash plugin system."""

    @hookspec
    def post_upsert(
        self,
        kind: str,
        entity_id: str,
        label: str,
        inserted: bool,
    ) -> None:
        """Called after a record is added (``inserted``) or replaced."""

    @hookspec
    def post_remove(
        self,
        kind: str,
        entity_id: str,
        removed: bool,
    ) -> None:
        """Called after a delete request. ``removed`` is False for unknown ids."""

    @hookspec
    def post_contract_finalized(
        self,
        contract_id: str,
        title: str,
        total_value: float,
        milestones: int,
        created: bool,
    ) -> None:
        """Called after a contract draft is finalized and stored."""

    @hookspec
    def post_search(
        self,
        query: str,
        counts: dict[str, Any],
        focus: str | None,
    ) -> None:
        """Called after a search query is evaluated."""

    @hookspec
    def post_navigate(
        self,
        previous: str,
        current: str,
        reason: str,
    ) -> None:
        """Called after the active section changes."""
