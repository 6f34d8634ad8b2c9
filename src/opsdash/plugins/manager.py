"""Plugin discovery and registration.

Built-in plugins (notifications) are registered directly by the
workspace. Third-party plugins come from setuptools entry points in the
``opsdash.plugins`` group; any name listed under ``[plugins] disabled``
is blocked before loading.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable

import pluggy

from opsdash.plugins.hookspecs import OpsdashHookSpec

PROJECT_NAME = "opsdash"
ENTRY_POINT_GROUP = "opsdash.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over ``pluggy.PluginManager`` with opsdash's hook specs."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(OpsdashHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether entry-point discovery has run."""
        return self._loaded

    def discover_and_load(self, disabled: Iterable[str] = ()) -> list[str]:
        """Load entry-point plugins, skipping *disabled* names.

        Returns the names of every registered plugin afterwards.
        """
        for name in disabled:
            self._pm.set_blocked(name)
            logger.debug("Plugin blocked by config: %s", name)
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        for plugin in list(self._pm.get_plugins()):
            if inspect.isclass(plugin) and _has_hook_impls(plugin):
                self._instantiate(plugin)
        self._loaded = True
        logger.debug("Loaded %d entry-point plugin(s)", count)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def is_blocked(self, name: str) -> bool:
        return self._pm.is_blocked(name)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def get_plugin(self, name: str) -> object | None:
        return self._pm.get_plugin(name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def _instantiate(self, plugin_cls: type) -> None:
        """Swap an entry point that registered a bare class for an instance of it."""
        name = self._pm.get_name(plugin_cls) or plugin_cls.__name__
        self._pm.unregister(plugin_cls)
        try:
            instance = plugin_cls()
        except Exception:
            logger.warning("Failed to instantiate plugin %s", name, exc_info=True)
            return
        self._pm.register(instance, name=name)


def _has_hook_impls(cls: type) -> bool:
    """True if *cls* defines any method marked with ``HookimplMarker("opsdash")``."""
    return any(
        callable(member) and getattr(member, f"{PROJECT_NAME}_impl", None)
        for attr, member in inspect.getmembers(cls)
        if not attr.startswith("_")
    )
