"""Global search — matching, focus selection, and debounced evaluation.

A query matches a record when any of the record's searchable fields
contains it, ignoring case. All five collections are searched on every
evaluation. The first non-empty result set, in :data:`SEARCH_PRECEDENCE`
order, decides where the view should focus.

Typing is debounced: :meth:`SearchCoordinator.on_input` restarts a timer
on every keystroke so only the last query of a burst is evaluated.
:meth:`SearchCoordinator.submit` skips the wait.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from opsdash.domain.entities import Client, Contract, Entity, Intern, Project, TeamMember
from opsdash.domain.types import KIND_SECTIONS, SEARCH_PRECEDENCE, EntityKind, Section
from opsdash.infrastructure.scheduler import Cancelable, Scheduler
from opsdash.infrastructure.store import StoreSnapshot
from opsdash.services._helpers import contains_ci
from opsdash.services.base import BaseService
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

SEARCH_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.CLIENT: ("name", "company", "email"),
    EntityKind.PROJECT: ("name", "description"),
    EntityKind.TEAM_MEMBER: ("name", "position", "department"),
    EntityKind.INTERN: ("name", "university", "department"),
    EntityKind.CONTRACT: ("title", "description"),
}


def matches(entity: Entity, query: str) -> bool:
    """True if any searchable field of *entity* contains *query* (case-insensitive)."""
    return any(contains_ci(getattr(entity, name), query) for name in SEARCH_FIELDS[entity.kind])


@dataclass(frozen=True)
class SearchResults:
    """Per-collection matches for one query."""

    query: str = ""
    clients: tuple[Client, ...] = ()
    projects: tuple[Project, ...] = ()
    team_members: tuple[TeamMember, ...] = ()
    interns: tuple[Intern, ...] = ()
    contracts: tuple[Contract, ...] = ()

    def for_kind(self, kind: EntityKind) -> tuple[Entity, ...]:
        return {
            EntityKind.CLIENT: self.clients,
            EntityKind.PROJECT: self.projects,
            EntityKind.TEAM_MEMBER: self.team_members,
            EntityKind.INTERN: self.interns,
            EntityKind.CONTRACT: self.contracts,
        }[kind]

    @property
    def is_empty(self) -> bool:
        return not any(self.for_kind(kind) for kind in EntityKind)

    def counts(self) -> dict[str, int]:
        return {kind.value: len(self.for_kind(kind)) for kind in SEARCH_PRECEDENCE}


def evaluate(query: str, snapshot: StoreSnapshot) -> SearchResults:
    """Search every collection in *snapshot*. A blank query matches nothing."""
    if not query.strip():
        return SearchResults(query=query)
    return SearchResults(
        query=query,
        clients=tuple(c for c in snapshot.clients if matches(c, query)),
        projects=tuple(p for p in snapshot.projects if matches(p, query)),
        team_members=tuple(m for m in snapshot.team_members if matches(m, query)),
        interns=tuple(i for i in snapshot.interns if matches(i, query)),
        contracts=tuple(c for c in snapshot.contracts if matches(c, query)),
    )


def focus_target(results: SearchResults) -> Section | None:
    """Section of the first non-empty result set, or None if all are empty."""
    for kind in SEARCH_PRECEDENCE:
        if results.for_kind(kind):
            return KIND_SECTIONS[kind]
    return None


ResultsListener = Callable[[SearchResults], None]


@dataclass
class _Pending:
    query: str
    handle: Cancelable


class SearchCoordinator:
    """Debounced search over a live store.

    Args:
        scheduler: Source of delayed, cancelable callbacks.
        snapshot: Returns the current store contents at evaluation time.
        debounce_ms: Quiet period required before a typed query is evaluated.
        on_results: Called after every evaluation, debounced or submitted.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        snapshot: Callable[[], StoreSnapshot],
        *,
        debounce_ms: float = 300,
        on_results: ResultsListener | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.snapshot = snapshot
        self.debounce_ms = debounce_ms
        self.on_results = on_results
        self.evaluations = 0
        self._pending: _Pending | None = None
        self._active = SearchResults()

    @property
    def active_query(self) -> str:
        return self._active.query

    @property
    def is_active(self) -> bool:
        """A non-blank query is in effect, so section listings show its results."""
        return bool(self._active.query.strip())

    @property
    def results(self) -> SearchResults:
        """Results of the most recent evaluation."""
        return self._active

    @property
    def pending_query(self) -> str | None:
        return None if self._pending is None else self._pending.query

    def on_input(self, query: str) -> None:
        """Record a keystroke. Evaluation happens after the debounce interval."""
        self.cancel()
        handle = self.scheduler.call_later(self.debounce_ms, lambda: self._fire(query))
        self._pending = _Pending(query=query, handle=handle)
        logger.debug("Search input %r scheduled in %s ms", query, self.debounce_ms)

    def submit(self, query: str) -> SearchResults:
        """Evaluate *query* now, dropping any pending debounced evaluation."""
        self.cancel()
        return self._evaluate(query)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.handle.cancel()
            self._pending = None

    def _fire(self, query: str) -> None:
        self._pending = None
        self._evaluate(query)

    def _evaluate(self, query: str) -> SearchResults:
        with trace_span("search.evaluate") as span:
            results = evaluate(query, self.snapshot())
            if span is not None:
                span.annotate("query", query)
                span.annotate("matches", sum(results.counts().values()))
        self.evaluations += 1
        self._active = results
        if self.on_results is not None:
            self.on_results(results)
        return results


def results_payload(results: SearchResults, focus: Section | None) -> dict[str, Any]:
    """JSON-ready summary of *results*."""
    return {
        "query": results.query,
        "counts": results.counts(),
        "focus": focus.value if focus is not None else None,
        "no_results": bool(results.query.strip()) and results.is_empty,
        "results": {
            kind.value: [e.model_dump(mode="json") for e in results.for_kind(kind)]
            for kind in SEARCH_PRECEDENCE
        },
    }


class SearchService(BaseService):
    """Search as service operations over the workspace coordinator."""

    @traced
    def search(self, query: str) -> ServiceResult:
        """Evaluate *query* immediately and report the focus decision."""
        ws = self._workspace
        previous = ws.view.current
        results = ws.search.submit(query)
        focus = focus_target(results)
        data = results_payload(results, focus)
        data["view"] = {"previous": previous.value, "current": ws.view.current.value}
        return ServiceResult(ok=True, op="search", data=data)

    @traced
    def type(self, query: str) -> ServiceResult:
        """Feed one keystroke's worth of input to the debouncer."""
        ws = self._workspace
        ws.search.on_input(query)
        return ServiceResult(
            ok=True,
            op="type",
            data={"query": query, "pending": True, "debounce_ms": ws.search.debounce_ms},
        )
