"""Command: interactive note generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultnote.commands._base import examples
from vaultnote.domain.types import DocumentCategory
from vaultnote.infrastructure.prompts import ClickPrompter
from vaultnote.services.create import CreateService

if TYPE_CHECKING:
    from vaultnote.commands._context import AppContext

_CATEGORY_CHOICES = {
    "top": DocumentCategory.TOP_LEVEL,
    "mid": DocumentCategory.MID_LEVEL,
    "leaf": DocumentCategory.LEAF,
}


@examples(
    "new",
    "new --category top",
    'new --category leaf --from "00 - Inbox/Untitled.md"',
    "--json new --category mid",
)
@click.command("new")
@click.option(
    "--category",
    type=click.Choice(sorted(_CATEGORY_CHOICES), case_sensitive=False),
    default=None,
    help="Kind of note: top (primary category), mid (secondary), leaf (content note).",
)
@click.option(
    "--from",
    "source",
    default=None,
    help="Vault-relative path of an existing draft to turn into the note.",
)
@click.pass_obj
def new(app: AppContext, category: str | None, source: str | None) -> None:
    """Create a note by answering a few questions."""
    svc = CreateService(app.store, app.reporter, app.config)
    result = svc.new_note(
        ClickPrompter(),
        category=_CATEGORY_CHOICES[category.lower()] if category else None,
        source=source,
        template_root=app.settings.vault_root,
    )
    app.emit(result)
