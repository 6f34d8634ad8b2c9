"""Synchronous event dispatch via pluggy with an in-memory event log.

All operations run to completion on one thread, so hooks are called
inline. Each dispatch is appended to the log before the hook runs and
marked ``completed`` or ``failed`` afterwards.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from opsdash.services._helpers import now_iso

if TYPE_CHECKING:
    from opsdash.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

EventStatus = Literal["pending", "completed", "failed"]


@dataclass
class EventRecord:
    """One dispatched event."""

    id: int
    hook_name: str
    payload: dict[str, Any]
    created: str
    status: EventStatus = "pending"
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "hook_name": self.hook_name,
            "status": self.status,
            "created": self.created,
        }
        if self.error is not None:
            out["error"] = self.error
        return out


class EventBus:
    """Dispatch lifecycle hooks and keep a log of what was sent.

    Parameters:
        plugin_manager: PluginManager whose hook relay receives events.
        max_log: Oldest records are dropped beyond this many.
    """

    def __init__(self, plugin_manager: PluginManager, *, max_log: int = 1000) -> None:
        self._pm = plugin_manager
        self._max_log = max_log
        self._log: list[EventRecord] = []
        self._next_id = 1

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> list[str]:
        """Run *hook_name* with *payload*. Returns warnings for failed hooks."""
        record = EventRecord(
            id=self._next_id,
            hook_name=hook_name,
            payload=dict(payload),
            created=now_iso(),
        )
        self._next_id += 1
        self._log.append(record)
        if len(self._log) > self._max_log:
            del self._log[: len(self._log) - self._max_log]

        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            record.status = "completed"
            return []

        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            record.status = "failed"
            record.error = str(exc)
            return [f"Plugin hook {hook_name} failed: {exc}"]
        record.status = "completed"
        return []

    @property
    def events(self) -> tuple[EventRecord, ...]:
        """Dispatched events, oldest first."""
        return tuple(self._log)

    def failed(self) -> list[EventRecord]:
        return [r for r in self._log if r.status == "failed"]

    def clear(self) -> None:
        self._log.clear()
