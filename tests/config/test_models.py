"""Tests for configuration section models."""

import pydantic
import pytest

from opsdash.config.models import (
    IdsConfig,
    OverviewConfig,
    PluginsConfig,
    SearchConfig,
    SeedConfig,
    WorkspaceConfig,
)


class TestDefaults:
    def test_stock_dashboard(self) -> None:
        assert WorkspaceConfig().name == "Blizon Technologies"
        assert SearchConfig().debounce_ms == 300
        assert IdsConfig().suffix_length == 9
        assert SeedConfig().builtin is True
        assert SeedConfig().path is None
        assert OverviewConfig() == OverviewConfig(
            recent_projects=3, latest_contracts=2, upcoming_deadlines=4
        )
        assert PluginsConfig().notifications is True
        assert PluginsConfig().disabled == []


class TestValidation:
    def test_negative_debounce_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            SearchConfig(debounce_ms=-1)

    @pytest.mark.parametrize("length", [3, 33])
    def test_suffix_length_bounds(self, length: int) -> None:
        with pytest.raises(pydantic.ValidationError):
            IdsConfig.model_validate({"suffix_length": length})

    def test_frozen(self) -> None:
        cfg = SearchConfig()
        with pytest.raises(pydantic.ValidationError):
            cfg.debounce_ms = 10  # type: ignore[misc]
