"""Tests for OpsSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from opsdash.config.settings import OpsSettings


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPSDASH_CONFIG", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = OpsSettings.from_cli(start_dir=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.no_seed is False
        assert settings.search.debounce_ms == 300
        assert settings.workspace.name == "Blizon Technologies"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = OpsSettings.from_cli(start_dir=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "opsdash.toml"
        toml.write_text('[workspace]\nname = "Acme Ops"\n[search]\ndebounce_ms = 50\n')
        settings = OpsSettings.from_cli(start_dir=tmp_path)
        assert settings.workspace.name == "Acme Ops"
        assert settings.search.debounce_ms == 50
        assert settings.overview.recent_projects == 3  # default preserved
        assert settings.config_path == toml

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[ids]\nsuffix_length = 12\n")
        settings = OpsSettings.from_cli(config_path=str(custom), start_dir=tmp_path)
        assert settings.ids.suffix_length == 12
        assert settings.config_path == custom

    def test_relative_seed_path_resolved_against_config(self, tmp_path: Path) -> None:
        (tmp_path / "opsdash.toml").write_text('[seed]\npath = "data/seed.json"\n')
        nested = tmp_path / "sub"
        nested.mkdir()
        settings = OpsSettings.from_cli(start_dir=nested)
        assert settings.seed.path == tmp_path / "data" / "seed.json"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "opsdash.toml").write_text("[workspace\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            OpsSettings.from_cli(start_dir=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "opsdash.toml").write_text("[search]\ndebounce_ms = 50\n")
        monkeypatch.setenv("OPSDASH_SEARCH__DEBOUNCE_MS", "75")
        settings = OpsSettings.from_cli(start_dir=tmp_path)
        assert settings.search.debounce_ms == 75

    def test_cli_flag_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPSDASH_QUIET", "false")
        settings = OpsSettings.from_cli(start_dir=tmp_path, quiet=True)
        assert settings.quiet is True

    def test_unset_flag_does_not_shadow_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OPSDASH_JSON_OUTPUT", "true")
        settings = OpsSettings.from_cli(start_dir=tmp_path, json_output=False)
        assert settings.json_output is True
