"""Command: vault initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vaultnote.commands._base import examples

if TYPE_CHECKING:
    from vaultnote.commands._context import AppContext


@examples("init", "init ~/vaults/security", "--json init /tmp/vault")
@click.command("init")
@click.argument("path", required=False, default=".")
@click.pass_obj
def init_cmd(app: AppContext, path: str) -> None:
    """Create the vault folders and default templates (existing files are kept)."""
    from vaultnote.services.init import InitService

    vault_path = Path(path).resolve()
    app.emit(InitService.init_vault(vault_path, app.settings.layout))
