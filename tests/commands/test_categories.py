"""Tests for the categories command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from vaultnote.cli import cli


class TestCategoriesList:
    def test_lists_primary_categories(self, cli_runner: CliRunner, vault_root: Path) -> None:
        for name in ("Red Team", "Blue Team"):
            (vault_root / "01 - Primary Categories" / f"{name}.md").write_text("")

        result = cli_runner.invoke(
            cli, ["--vault", str(vault_root), "--json", "categories", "list", "top"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data == {"kind": "top", "count": 2, "entries": ["Blue Team", "Red Team"]}

    def test_human_output(self, cli_runner: CliRunner, vault_root: Path) -> None:
        (vault_root / "02 - Secondary Categories" / "Initial Access.md").write_text("")

        result = cli_runner.invoke(cli, ["--vault", str(vault_root), "categories", "list", "MID"])

        assert result.exit_code == 0
        assert "OK: list_categories" in result.output
        assert "entries: Initial Access" in result.output

    def test_rejects_unknown_kind(self, cli_runner: CliRunner, vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--vault", str(vault_root), "categories", "list", "leaf"])
        assert result.exit_code == 2
