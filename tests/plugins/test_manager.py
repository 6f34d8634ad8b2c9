"""Tests for PluginManager — discovery, registration, and hook relay."""

from __future__ import annotations

import pluggy

from opsdash.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("opsdash")


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    @hookimpl
    def post_navigate(self, previous: str, current: str, reason: str) -> None:
        self.calls.append(current)


class _NoHooks:
    pass


class TestPluginManager:
    def test_hook_relay_accessible(self):
        pm = PluginManager()
        for name in (
            "post_upsert",
            "post_remove",
            "post_contract_finalized",
            "post_search",
            "post_navigate",
        ):
            assert hasattr(pm.hook, name)

    def test_register_plugin(self):
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self):
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self):
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()
        assert pm.get_plugin("dummy") is None

    def test_is_loaded(self):
        pm = PluginManager()
        assert pm.is_loaded is False
        pm.discover_and_load()
        assert pm.is_loaded is True

    def test_hook_dispatch(self):
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.hook.post_navigate(previous="overview", current="team", reason="navigate")
        assert plugin.calls == ["team"]

    def test_get_plugins_returns_registered(self):
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="test")
        assert plugin in pm.get_plugins()
        assert pm.get_plugin("test") is plugin


class TestEntryPointLoading:
    def test_class_replaced_by_instance(self):
        pm = PluginManager()
        pm._pm.register(_DummyPlugin, name="from-entry-point")
        pm.discover_and_load()
        plugin = pm.get_plugin("from-entry-point")
        assert isinstance(plugin, _DummyPlugin)
        pm.hook.post_navigate(previous="overview", current="calendar", reason="navigate")
        assert plugin.calls == ["calendar"]

    def test_class_without_hooks_left_alone(self):
        pm = PluginManager()
        pm._pm.register(_NoHooks, name="inert")
        pm.discover_and_load()
        assert pm.get_plugin("inert") is _NoHooks

    def test_disabled_names_are_blocked(self):
        pm = PluginManager()
        pm.discover_and_load(disabled=["noisy"])
        assert pm.is_blocked("noisy")
        pm.register_plugin(_DummyPlugin(), name="noisy")
        assert "noisy" not in pm.list_plugin_names()
