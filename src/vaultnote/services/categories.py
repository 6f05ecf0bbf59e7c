"""Category registry: existing primary and secondary category notes.

Entries are the markdown notes inside the category directories; the
note's filename stem is the category name.
"""

from __future__ import annotations

from vaultnote.domain.errors import StoreOperationError
from vaultnote.domain.models import CategoryLink
from vaultnote.domain.types import CATEGORY_LABELS, DocumentCategory
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.services.base import BaseService

DONE = "__done__"


class CategoryRegistry(BaseService):
    """Lists category notes and drives multi-select linking."""

    def directory_for(self, kind: DocumentCategory) -> str:
        if kind is DocumentCategory.TOP_LEVEL:
            return self.layout.top_level_dir
        if kind is DocumentCategory.MID_LEVEL:
            return self.layout.mid_level_dir
        msg = f"{kind} is not a linkable category kind"
        raise ValueError(msg)

    def list_entries(self, kind: DocumentCategory) -> list[str]:
        """Sorted names of the category notes of *kind*.

        A missing or unreadable directory yields an empty list.
        """
        directory = self.directory_for(kind)
        try:
            children = self._store.list_children(directory)
        except StoreOperationError as exc:
            self._reporter.debug("category directory unavailable", path=directory, error=str(exc))
            return []
        return sorted(c.stem for c in children if not c.is_dir and c.suffix == ".md")

    def select_multiple(self, kind: DocumentCategory, prompter: Prompter) -> list[CategoryLink]:
        """Let the user pick any number of distinct entries of *kind*.

        Ends on "done", on a cancelled prompt, or once every entry is
        chosen. Chosen entries are removed from the menu.
        """
        remaining = self.list_entries(kind)
        label = CATEGORY_LABELS[kind].lower()
        if not remaining:
            self._reporter.notice(f"No {label} notes exist yet; skipping links.")
            return []

        chosen: list[str] = []
        while remaining:
            labels = list(remaining)
            values = list(remaining)
            if chosen:
                labels.insert(0, f"Done ({len(chosen)} selected)")
                values.insert(0, DONE)

            picked = prompter.choice(labels, values, f"Link to a {label}:")
            if picked is None or picked == DONE:
                break
            chosen.append(picked)
            remaining.remove(picked)

        self._reporter.debug("categories selected", kind=str(kind), count=len(chosen))
        return [CategoryLink(name=name) for name in chosen]
