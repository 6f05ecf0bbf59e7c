"""Tests for VaultNoteSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from vaultnote.config.models import PromptsConfig
from vaultnote.config.settings import VaultNoteSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VAULTNOTE_CONFIG", "VAULTNOTE_PROMPTS__MAX_ATTEMPTS", "VAULTNOTE_VAULT_ROOT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = VaultNoteSettings.from_cli(vault_root=tmp_path)
        assert settings.vault_root == tmp_path
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.prompts.max_attempts == 3
        assert settings.symbols.default == "📌"
        assert settings.symbols.placeholder == "📄"
        assert settings.layout.top_level_dir == "01 - Primary Categories"
        assert settings.assembly.timestamp_format == "%Y-%m-%d %H:%M"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = VaultNoteSettings.from_cli(vault_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]

    def test_max_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="at least 1"):
            PromptsConfig(max_attempts=0)


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "vaultnote.toml").write_text(
            '[prompts]\nmax_attempts = 5\n[layout]\nleaf_dir = "Notes"\n'
        )
        settings = VaultNoteSettings.from_cli(vault_root=tmp_path)
        assert settings.prompts.max_attempts == 5
        assert settings.layout.leaf_dir == "Notes"
        assert settings.layout.mid_level_dir == "02 - Secondary Categories"

    def test_vault_root_from_discovered_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "vaultnote.toml").write_text("")
        nested = tmp_path / "03 - Notes"
        nested.mkdir()
        monkeypatch.chdir(nested)

        settings = VaultNoteSettings.from_cli()

        assert settings.vault_root == tmp_path.resolve()
        assert settings.config_path == tmp_path.resolve() / "vaultnote.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[symbols]\ndefault = "🧷"\n')
        settings = VaultNoteSettings.from_cli(config_path=str(custom), vault_root=tmp_path)
        assert settings.symbols.default == "🧷"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "vaultnote.toml").write_text("[prompts\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            VaultNoteSettings.from_cli(vault_root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "vaultnote.toml").write_text("[prompts]\nmax_attempts = 5\n")
        monkeypatch.setenv("VAULTNOTE_PROMPTS__MAX_ATTEMPTS", "7")
        settings = VaultNoteSettings.from_cli(vault_root=tmp_path)
        assert settings.prompts.max_attempts == 7

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = VaultNoteSettings.from_cli(vault_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_to_config_carries_sections(self, tmp_path: Path) -> None:
        (tmp_path / "vaultnote.toml").write_text("[prompts]\nmax_attempts = 2\n")
        config = VaultNoteSettings.from_cli(vault_root=tmp_path).to_config()
        assert config.prompts.max_attempts == 2
