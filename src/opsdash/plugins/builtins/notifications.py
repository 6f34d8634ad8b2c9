"""Built-in notifications plugin.

Turns completion signals into user-facing notifications (the dashboard's
success toasts). The plugin only formats messages; it never touches the
store. Notifications accumulate until :meth:`NotificationsPlugin.drain`
is called; only the newest :data:`MAX_PENDING` are kept.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Literal

import pluggy

from opsdash.domain.types import KIND_LABELS, EntityKind

hookimpl = pluggy.HookimplMarker("opsdash")

logger = logging.getLogger(__name__)

Variant = Literal["default", "destructive"]

MAX_PENDING = 50

# kind -> (added title, added description, updated title, updated description)
_UPSERT_MESSAGES: dict[EntityKind, tuple[str, str, str, str]] = {
    EntityKind.CLIENT: (
        "Client added successfully",
        "{label} has been added to your clients.",
        "Client updated successfully",
        "{label}'s information has been updated.",
    ),
    EntityKind.PROJECT: (
        "Project added successfully",
        "{label} has been added to your projects.",
        "Project updated successfully",
        "{label} has been updated.",
    ),
    EntityKind.TEAM_MEMBER: (
        "Team member added successfully",
        "{label} has been added to your team.",
        "Team member updated",
        "{label}'s information has been updated.",
    ),
    EntityKind.INTERN: (
        "Intern added successfully",
        "{label} has been added to your interns.",
        "Intern updated successfully",
        "{label}'s information has been updated.",
    ),
    EntityKind.CONTRACT: (
        "Contract added successfully",
        "{label} has been added to your contracts.",
        "Contract updated successfully",
        "{label} has been updated.",
    ),
}


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = "default"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class NotificationsPlugin:
    """Collect success notifications for mutations."""

    def __init__(self, max_pending: int = MAX_PENDING) -> None:
        self._pending: deque[Notification] = deque(maxlen=max_pending)

    @property
    def pending(self) -> tuple[Notification, ...]:
        return tuple(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear the queued notifications."""
        out = list(self._pending)
        self._pending.clear()
        return out

    def _push(self, notification: Notification) -> None:
        logger.debug("Notification: %s", notification.title)
        self._pending.append(notification)

    @hookimpl
    def post_upsert(self, kind: str, entity_id: str, label: str, inserted: bool) -> None:
        added_title, added_desc, updated_title, updated_desc = _UPSERT_MESSAGES[EntityKind(kind)]
        if inserted:
            self._push(Notification(added_title, added_desc.format(label=label)))
        else:
            self._push(Notification(updated_title, updated_desc.format(label=label)))

    @hookimpl
    def post_remove(self, kind: str, entity_id: str, removed: bool) -> None:
        if not removed:
            return
        noun = KIND_LABELS[EntityKind(kind)]
        self._push(Notification(f"{noun} removed", f"{entity_id} has been removed."))
