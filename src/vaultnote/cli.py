"""Root CLI group for vaultnote with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from vaultnote import __version__
from vaultnote.commands import register_commands
from vaultnote.commands._context import AppContext
from vaultnote.config.settings import VaultNoteSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vaultnote")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Vault directory (default: discovered from the working directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    vault_root: Path | None,
) -> None:
    """vaultnote - build category-linked notes from vault templates."""
    ctx.ensure_object(dict)
    settings = VaultNoteSettings.from_cli(
        config_path=config_path,
        vault_root=vault_root.resolve() if vault_root else None,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
