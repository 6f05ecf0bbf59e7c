"""Subcommand modules for vaultnote.

Provides register_commands() which uses deferred imports to keep
``vaultnote --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from vaultnote.commands.categories import categories
    from vaultnote.commands.types_cmd import types

    cli.add_command(types)
    cli.add_command(categories)

    # --- Standalone commands ---
    from vaultnote.commands.init_cmd import init_cmd
    from vaultnote.commands.new import new

    cli.add_command(init_cmd)
    cli.add_command(new)
