"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from opsdash.plugins.event_bus import EventBus, EventRecord
from opsdash.plugins.manager import PluginManager

__all__ = ["EventBus", "EventRecord", "PluginManager"]
