"""Domain layer — pure entity models, drafts, and invariants.

The domain layer never imports from infrastructure, services, or commands.
"""
