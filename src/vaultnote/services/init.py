"""InitService: scaffold the vault layout and default template fragments."""

from __future__ import annotations

from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from vaultnote.config.discovery import CONFIG_FILENAME, STATE_DIRNAME
from vaultnote.config.models import LayoutConfig
from vaultnote.services.result import ServiceResult

# Packaged template directory -> LayoutConfig attribute naming its vault location.
_TEMPLATE_SETS = {
    "Primary Category": "top_level_templates",
    "Secondary Category": "mid_level_templates",
    "Content Types": "classification_templates",
}


class InitService:
    """Create (or complete) a vault without overwriting existing files."""

    @staticmethod
    def _packaged_templates() -> Traversable:
        return resources.files("vaultnote").joinpath("templates/vault")

    @staticmethod
    def init_vault(vault_root: Path, layout: LayoutConfig | None = None) -> ServiceResult:
        layout = layout or LayoutConfig()
        created: list[str] = []
        skipped: list[str] = []

        try:
            for directory in (
                layout.inbox_dir,
                layout.top_level_dir,
                layout.mid_level_dir,
                layout.leaf_dir,
                STATE_DIRNAME,
            ):
                path = vault_root / directory
                if not path.exists():
                    path.mkdir(parents=True)
                    created.append(directory)

            config_file = vault_root / CONFIG_FILENAME
            if not config_file.exists():
                config_file.write_text("# vaultnote overrides; see [layout], [prompts]\n", "utf-8")
                created.append(CONFIG_FILENAME)

            packaged = InitService._packaged_templates()
            for source_name, attribute in _TEMPLATE_SETS.items():
                target = vault_root / layout.template_dir / getattr(layout, attribute)
                if source_name == "Content Types":
                    # Only the basic type ships; it takes the configured name.
                    source = packaged / source_name / "Basic"
                    target = target / layout.basic_classification
                else:
                    source = packaged / source_name
                InitService._copy_tree(source, target, vault_root, created, skipped)
        except OSError as exc:
            return ServiceResult.failure(
                "init_vault", "INIT_FAILED", str(exc), path=str(vault_root)
            )

        return ServiceResult(
            ok=True,
            op="init_vault",
            data={"path": str(vault_root), "created": created, "skipped": skipped},
        )

    @staticmethod
    def _copy_tree(
        source: Traversable,
        target: Path,
        vault_root: Path,
        created: list[str],
        skipped: list[str],
    ) -> None:
        target.mkdir(parents=True, exist_ok=True)
        for item in source.iterdir():
            destination = target / item.name
            relative = destination.relative_to(vault_root).as_posix()
            if item.is_dir():
                InitService._copy_tree(item, destination, vault_root, created, skipped)
            elif destination.exists():
                skipped.append(relative)
            else:
                destination.write_text(item.read_text(encoding="utf-8"), encoding="utf-8")
                created.append(relative)
