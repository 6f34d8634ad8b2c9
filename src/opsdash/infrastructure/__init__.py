"""Infrastructure layer — in-memory store, timers, and session wiring.

The store and scheduler depend only on the domain layer. The
:class:`~opsdash.infrastructure.workspace.Workspace` composes them with the
view state, search coordinator, and plugin bus for one dashboard session.
"""
