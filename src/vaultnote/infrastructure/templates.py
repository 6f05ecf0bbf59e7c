"""Shared Jinja2 template loading with per-vault override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, vault_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.vaultnote/templates/`` inside the vault.
    Both a namespaced directory (for example ``.vaultnote/templates/document/``)
    and the shared root are supported.
    """

    loaders: list[BaseLoader] = []
    if vault_root is not None:
        template_root = vault_root / ".vaultnote" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("vaultnote", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def render_template(
    group: str,
    name: str,
    *,
    vault_root: Path | None = None,
    **context: object,
) -> str:
    """Render one packaged (or vault-overridden) template to a string."""
    env = build_template_environment(group, vault_root=vault_root)
    return env.get_template(name).render(**context)
