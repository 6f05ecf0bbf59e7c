"""Interactive prompt primitives.

Two operations are all the workflow needs: a free-text prompt and a
single-choice menu. Both return ``None`` when the user cancels, and each
call site decides what cancellation means (fallback, default, or abort).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

import click

T = TypeVar("T")


class Prompter(Protocol):
    """User-interaction collaborator."""

    def text(self, message: str) -> str | None: ...

    def choice(self, labels: Sequence[str], values: Sequence[T], message: str) -> T | None: ...


class ClickPrompter:
    """:class:`Prompter` backed by ``click.prompt``.

    Ctrl-C and end-of-input count as cancellation. Menus are numbered
    from 1; entering ``0`` cancels.
    """

    def text(self, message: str) -> str | None:
        try:
            return click.prompt(message, default="", show_default=False, err=True)
        except click.Abort:
            click.echo(err=True)
            return None

    def choice(self, labels: Sequence[str], values: Sequence[T], message: str) -> T | None:
        if len(labels) != len(values):
            msg = "labels and values must have the same length"
            raise ValueError(msg)
        if not labels:
            return None

        click.echo(message, err=True)
        for index, label in enumerate(labels, start=1):
            click.echo(f"  {index:>2}. {label}", err=True)
        click.echo("   0. Cancel", err=True)

        try:
            picked = click.prompt(
                "Select",
                type=click.IntRange(0, len(labels)),
                default=0,
                show_default=False,
                err=True,
            )
        except click.Abort:
            click.echo(err=True)
            return None
        if picked == 0:
            return None
        return values[picked - 1]
