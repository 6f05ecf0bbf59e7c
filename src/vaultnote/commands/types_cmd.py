"""Command group: content types (list, create)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultnote.commands._base import examples
from vaultnote.services.classifications import ClassificationRegistry
from vaultnote.services.result import ServiceResult

if TYPE_CHECKING:
    from vaultnote.commands._context import AppContext


@examples("types list", 'types create "Malware Sample" 🦠', "--json types list")
@click.group("types")
def types() -> None:
    """Inspect and extend the content types available to notes."""


def _registry(app: AppContext) -> ClassificationRegistry:
    return ClassificationRegistry(app.store, app.reporter, app.config)


@examples("types list")
@types.command("list")
@click.pass_obj
def list_types(app: AppContext) -> None:
    """List content types with their symbols and search tags."""
    descriptors = _registry(app).list_classifications()
    app.emit(
        ServiceResult(
            ok=True,
            op="list_types",
            data={
                "count": len(descriptors),
                "types": [
                    {"name": d.name, "symbol": d.symbol, "search_tag": d.search_tag}
                    for d in descriptors
                ],
            },
        )
    )


@examples('types create "Malware Sample" 🦠', "types create Playbook 📖")
@types.command("create")
@click.argument("name")
@click.argument("symbol")
@click.pass_obj
def create_type(app: AppContext, name: str, symbol: str) -> None:
    """Create content type NAME tagged with SYMBOL from the basic template."""
    app.emit(_registry(app).add_type(name, symbol))
