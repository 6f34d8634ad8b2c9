"""Workspace — everything one dashboard session holds.

The workspace is the single dependency injected into every service. It
owns the entity store, the id generator, the active view, the search
coordinator, the open draft, and the plugin event bus. Nothing outlives
the process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opsdash.domain.ids import IdGenerator
from opsdash.domain.seed import SeedData, builtin_seed, empty_seed, load_seed_file
from opsdash.infrastructure.scheduler import ManualScheduler, Scheduler
from opsdash.infrastructure.store import EntityStore
from opsdash.plugins.builtins.notifications import NotificationsPlugin
from opsdash.plugins.event_bus import EventBus
from opsdash.plugins.manager import PluginManager
from opsdash.services.navigation import Transition, ViewState
from opsdash.services.search import SearchCoordinator, SearchResults, focus_target

if TYPE_CHECKING:
    from opsdash.config.settings import OpsSettings
    from opsdash.domain.drafts import Draft

logger = logging.getLogger(__name__)

NOTIFICATIONS_PLUGIN = "notifications"


def load_seed(settings: OpsSettings) -> SeedData:
    """Pick the seed input named by *settings*.

    ``--no-seed`` wins, then ``[seed] path``, then the built-in sample set.
    """
    if settings.no_seed:
        return empty_seed()
    if settings.seed.path is not None:
        logger.debug("Loading seed data from %s", settings.seed.path)
        return load_seed_file(settings.seed.path)
    if settings.seed.builtin:
        return builtin_seed()
    return empty_seed()


class Workspace:
    """One in-memory dashboard session.

    Args:
        settings: Resolved settings.
        seed: Initial records. Defaults to :func:`load_seed`.
        scheduler: Timer source for search debouncing. Defaults to a
            :class:`ManualScheduler` (virtual clock).
        load_plugins: Discover entry-point plugins in addition to built-ins.
    """

    def __init__(
        self,
        settings: OpsSettings,
        *,
        seed: SeedData | None = None,
        scheduler: Scheduler | None = None,
        load_plugins: bool = True,
    ) -> None:
        self.settings = settings
        self.store = EntityStore.from_seed(seed if seed is not None else load_seed(settings))
        self.ids = IdGenerator(length=settings.ids.suffix_length)
        for existing in self.store.all_ids():
            self.ids.reserve(existing)

        self.plugin_manager = PluginManager()
        if settings.plugins.notifications:
            self.plugin_manager.register_plugin(NotificationsPlugin(), name=NOTIFICATIONS_PLUGIN)
        if load_plugins:
            self.plugin_manager.discover_and_load(settings.plugins.disabled)
        self.event_bus: EventBus | None = EventBus(self.plugin_manager)

        self.scheduler: Scheduler = scheduler or ManualScheduler()
        self.view = ViewState(on_transition=self._on_transition)
        self.search = SearchCoordinator(
            self.scheduler,
            self.store.snapshot,
            debounce_ms=settings.search.debounce_ms,
            on_results=self._on_search_results,
        )
        self.draft: Draft | None = None
        logger.debug("Workspace ready: %s", self.store.counts())

    @property
    def notifications(self) -> NotificationsPlugin | None:
        plugin = self.plugin_manager.get_plugin(NOTIFICATIONS_PLUGIN)
        return plugin if isinstance(plugin, NotificationsPlugin) else None

    def _on_transition(self, transition: Transition) -> None:
        if self.event_bus is not None:
            self.event_bus.dispatch("post_navigate", transition.to_dict())

    def _on_search_results(self, results: SearchResults) -> None:
        focus = focus_target(results)
        if focus is not None:
            self.view.apply_focus(focus)
        elif results.query.strip():
            logger.debug("No results for %r; view stays on %s", results.query, self.view.current)
        if self.event_bus is not None:
            self.event_bus.dispatch(
                "post_search",
                {
                    "query": results.query,
                    "counts": results.counts(),
                    "focus": focus.value if focus is not None else None,
                },
            )
