"""Tests for InitService: vault scaffolding."""

from __future__ import annotations

from pathlib import Path

from vaultnote.config.models import LayoutConfig
from vaultnote.services.init import InitService


class TestInitVault:
    def test_creates_layout_and_templates(self, tmp_path: Path) -> None:
        result = InitService.init_vault(tmp_path)

        assert result.ok
        assert result.op == "init_vault"
        for directory in (
            "00 - Inbox",
            "01 - Primary Categories",
            "02 - Secondary Categories",
            "03 - Notes",
            ".vaultnote",
        ):
            assert (tmp_path / directory).is_dir()
        assert (tmp_path / "vaultnote.toml").is_file()
        templates = tmp_path / "99 - Templates"
        for fragment in ("metadata.md", "body.md"):
            assert (templates / "Primary Category" / fragment).is_file()
            assert (templates / "Secondary Category" / fragment).is_file()
        for fragment in ("metadata.md", "body.md", "footer.md"):
            assert (templates / "Content Types" / "Basic" / fragment).is_file()
        assert "99 - Templates/Content Types/Basic/footer.md" in result.data["created"]

    def test_existing_files_are_kept(self, tmp_path: Path) -> None:
        InitService.init_vault(tmp_path)
        body = tmp_path / "99 - Templates" / "Primary Category" / "body.md"
        body.write_text("my own body\n", encoding="utf-8")

        result = InitService.init_vault(tmp_path)

        assert result.ok
        assert body.read_text(encoding="utf-8") == "my own body\n"
        assert "99 - Templates/Primary Category/body.md" in result.data["skipped"]
        assert result.data["created"] == []

    def test_custom_layout(self, tmp_path: Path) -> None:
        layout = LayoutConfig(leaf_dir="Notes", basic_classification="General")

        result = InitService.init_vault(tmp_path, layout)

        assert result.ok
        assert (tmp_path / "Notes").is_dir()
        assert (tmp_path / "99 - Templates" / "Content Types" / "General" / "metadata.md").is_file()

    def test_failure_is_reported(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")

        result = InitService.init_vault(blocker)

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INIT_FAILED"
