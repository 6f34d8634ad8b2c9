"""View/focus state machine and the navigation service.

The active section is a label only: it never gates a data operation.
``navigate`` always transitions (even to the current section);
``apply_focus`` transitions only when the target differs, so repeated
search focus is idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from opsdash.domain.types import Section
from opsdash.services.base import BaseService
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import traced

logger = logging.getLogger(__name__)


class TransitionReason(StrEnum):
    NAVIGATE = "navigate"
    SEARCH_FOCUS = "search_focus"


@dataclass(frozen=True)
class Transition:
    previous: Section
    current: Section
    reason: TransitionReason

    def to_dict(self) -> dict[str, str]:
        return {
            "previous": self.previous.value,
            "current": self.current.value,
            "reason": self.reason.value,
        }


TransitionListener = Callable[[Transition], None]


class ViewState:
    """Which dashboard section is active. Starts at Overview; no terminal state."""

    def __init__(
        self,
        initial: Section = Section.OVERVIEW,
        *,
        on_transition: TransitionListener | None = None,
    ) -> None:
        self._current = initial
        self._history: list[Transition] = []
        self._listeners: list[TransitionListener] = []
        if on_transition is not None:
            self._listeners.append(on_transition)

    @property
    def current(self) -> Section:
        return self._current

    @property
    def history(self) -> tuple[Transition, ...]:
        return tuple(self._history)

    def subscribe(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def navigate(self, section: Section) -> Transition:
        """Explicit section selection. Always records a transition."""
        return self._move(section, TransitionReason.NAVIGATE)

    def apply_focus(self, section: Section) -> Transition | None:
        """Focus change requested by search. No-op when already there."""
        if section == self._current:
            return None
        return self._move(section, TransitionReason.SEARCH_FOCUS)

    def _move(self, section: Section, reason: TransitionReason) -> Transition:
        transition = Transition(previous=self._current, current=section, reason=reason)
        self._current = section
        self._history.append(transition)
        logger.debug("View %s -> %s (%s)", transition.previous, section, reason)
        for listener in self._listeners:
            listener(transition)
        return transition


class NavigationService(BaseService):
    """Section selection as a service operation."""

    @traced
    def navigate(self, section: str | Section) -> ServiceResult:
        op = "navigate"
        try:
            target = Section(section)
        except ValueError:
            valid = ", ".join(s.value for s in Section)
            return ServiceResult.failure(
                op,
                "UNKNOWN_SECTION",
                f"Unknown section '{section}' (expected one of: {valid})",
                section=str(section),
            )
        transition = self._workspace.view.navigate(target)
        return ServiceResult(ok=True, op=op, data=transition.to_dict())

    @traced
    def current(self) -> ServiceResult:
        view = self._workspace.view
        return ServiceResult(
            ok=True,
            op="view",
            data={
                "current": view.current.value,
                "history": [t.to_dict() for t in view.history],
            },
        )
