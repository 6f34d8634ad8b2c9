"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, opsdash.toml only contains overrides.
An empty file (or no file at all) gives the stock dashboard with sample data.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- opsdash.toml sections ---


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    name: str = "Blizon Technologies"


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    debounce_ms: int = Field(default=300, ge=0)


class IdsConfig(BaseModel):
    """[ids] section."""

    model_config = {"frozen": True}

    suffix_length: int = Field(default=9, ge=4, le=32)


class SeedConfig(BaseModel):
    """[seed] section.

    ``path`` wins over ``builtin`` when both are set.
    """

    model_config = {"frozen": True}

    builtin: bool = True
    path: Path | None = None


class OverviewConfig(BaseModel):
    """[overview] section."""

    model_config = {"frozen": True}

    recent_projects: int = Field(default=3, ge=0)
    latest_contracts: int = Field(default=2, ge=0)
    upcoming_deadlines: int = Field(default=4, ge=0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    notifications: bool = True
    disabled: list[str] = Field(default_factory=list)
