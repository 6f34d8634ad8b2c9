"""CalendarService — project deadlines and milestone due dates by day."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from opsdash.services.base import BaseService
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import traced


class EventType(StrEnum):
    PROJECT = "project"
    MILESTONE = "milestone"


@dataclass(frozen=True)
class CalendarEvent:
    date: date
    title: str
    description: str
    type: EventType
    ref_id: str

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["date"] = self.date.isoformat()
        out["type"] = self.type.value
        return out


class CalendarService(BaseService):
    """Derive calendar events from projects and contract milestones."""

    def events(self) -> list[CalendarEvent]:
        """Every event: project deadlines first, then milestones, in store order."""
        snap = self._workspace.store.snapshot()
        out = [
            CalendarEvent(
                date=p.end_date,
                title=f"Project Deadline: {p.name}",
                description=p.description,
                type=EventType.PROJECT,
                ref_id=p.id,
            )
            for p in snap.projects
        ]
        out.extend(
            CalendarEvent(
                date=m.due_date,
                title=f"Milestone: {m.title}",
                description=f"{c.title} - {m.description}",
                type=EventType.MILESTONE,
                ref_id=m.id,
            )
            for c in snap.contracts
            for m in c.milestones
        )
        return out

    def events_on(self, day: date) -> list[CalendarEvent]:
        return [e for e in self.events() if e.date == day]

    def dates_with_events(self) -> list[date]:
        return sorted({e.date for e in self.events()})

    @traced
    def calendar(self, day: date | None = None) -> ServiceResult:
        """Events on *day* (all events when None) plus the dates that have any."""
        events = self.events() if day is None else self.events_on(day)
        return ServiceResult(
            ok=True,
            op="calendar",
            data={
                "date": day.isoformat() if day else None,
                "events": [e.to_dict() for e in events],
                "dates_with_events": [d.isoformat() for d in self.dates_with_events()],
            },
        )
