"""Tests for config and vault root discovery."""

from pathlib import Path

import pytest

from vaultnote.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    STATE_DIRNAME,
    find_config,
    find_vault_root,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_pointing_nowhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestFindVaultRoot:
    def test_state_directory_marks_vault(self, tmp_path: Path) -> None:
        (tmp_path / STATE_DIRNAME).mkdir()
        child = tmp_path / "03 - Notes"
        child.mkdir()
        assert find_vault_root(child) == tmp_path

    def test_config_file_marks_vault(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_vault_root(tmp_path) == tmp_path

    def test_none_outside_a_vault(self, tmp_path: Path) -> None:
        assert find_vault_root(tmp_path) is None
