"""Command group: primary and secondary categories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultnote.commands._base import examples
from vaultnote.domain.types import DocumentCategory
from vaultnote.services.categories import CategoryRegistry
from vaultnote.services.result import ServiceResult

if TYPE_CHECKING:
    from vaultnote.commands._context import AppContext

_KINDS = {"top": DocumentCategory.TOP_LEVEL, "mid": DocumentCategory.MID_LEVEL}


@examples("categories list top")
@click.group("categories")
def categories() -> None:
    """Inspect existing category notes."""


@examples("categories list top", "--json categories list mid")
@categories.command("list")
@click.argument("kind", type=click.Choice(sorted(_KINDS), case_sensitive=False))
@click.pass_obj
def list_categories(app: AppContext, kind: str) -> None:
    """List primary (top) or secondary (mid) category notes."""
    registry = CategoryRegistry(app.store, app.reporter, app.config)
    entries = registry.list_entries(_KINDS[kind.lower()])
    app.emit(
        ServiceResult(
            ok=True,
            op="list_categories",
            data={"kind": kind.lower(), "count": len(entries), "entries": entries},
        )
    )
