"""Shared command decoration: the ``--examples`` flag."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import click

CommandT = TypeVar("CommandT", bound=click.Command)

PROG = "vaultnote"


def examples(*invocations: str) -> Callable[[CommandT], CommandT]:
    """Give a built command an eager ``--examples`` flag.

    Each invocation is written without the program name, e.g.
    ``examples("init", "init ~/vaults/security")``. Apply it above
    ``@click.command``/``@group.command`` so it receives the command object.
    """
    text = "\n".join(f"  {PROG} {line}" for line in invocations)

    def attach(cmd: CommandT) -> CommandT:
        def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(text)
            ctx.exit(0)

        cmd.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show,
                help="Show usage examples.",
            )
        )
        return cmd

    return attach
