"""Record models flowing through the generation pipeline.

All models are frozen Pydantic models. :class:`NoteConfiguration` is
built step by step, but every ``with_*`` call returns a new validated
instance instead of mutating the current one.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, computed_field, model_validator

from vaultnote.domain.types import DocumentCategory


def make_search_tag(symbol: str, name: str) -> str:
    """Build the search tag for an entry: symbol + underscore-joined name.

    Examples:
        >>> make_search_tag("🦠", "Malware Sample")
        '🦠Malware_Sample'
    """
    return symbol + name.replace(" ", "_")


class ClassificationDescriptor(BaseModel):
    """A content type discovered in (or written to) the template directory.

    ``name`` is the identity key; it is also the template sub-directory name.
    """

    model_config = {"frozen": True}

    name: str
    symbol: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_label(self) -> str:
        return f"{self.symbol} {self.name}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def search_tag(self) -> str:
        return make_search_tag(self.symbol, self.name)


class CategoryLink(BaseModel):
    """Reference to an existing primary or secondary category note."""

    model_config = {"frozen": True}

    name: str

    @property
    def reference(self) -> str:
        """Wiki-link form, quoted for embedding in YAML front matter."""
        return f'"[[{self.name}]]"'

    def __str__(self) -> str:
        return self.reference


class NoteConfiguration(BaseModel):
    """Everything needed to assemble one note.

    INVARIANT: ``symbol`` is set only for top-level notes, ``classification``
    only for leaf notes, and ``footer_template`` only for leaf notes.
    Completeness (all required fields present) is checked separately by
    :meth:`missing_fields` once path resolution has run.
    """

    model_config = {"frozen": True}

    category: DocumentCategory
    title: str = ""
    symbol: str | None = None
    top_level_links: tuple[CategoryLink, ...] = ()
    mid_level_links: tuple[CategoryLink, ...] = ()
    classification: ClassificationDescriptor | None = None
    destination_path: str | None = None
    metadata_template: str | None = None
    body_template: str | None = None
    footer_template: str | None = None

    @model_validator(mode="after")
    def _check_category_fields(self) -> Self:
        if self.symbol is not None and self.category is not DocumentCategory.TOP_LEVEL:
            msg = f"symbol is only valid for top-level notes, not {self.category}"
            raise ValueError(msg)
        if self.classification is not None and self.category is not DocumentCategory.LEAF:
            msg = f"classification is only valid for leaf notes, not {self.category}"
            raise ValueError(msg)
        if self.footer_template is not None and self.category is not DocumentCategory.LEAF:
            msg = f"footer template is only valid for leaf notes, not {self.category}"
            raise ValueError(msg)
        return self

    # --- Immutable builder steps ---

    def _evolve(self, **changes: Any) -> NoteConfiguration:
        data = self.model_dump()
        data.update(changes)
        return NoteConfiguration.model_validate(data)

    def with_title(self, title: str) -> NoteConfiguration:
        return self._evolve(title=title)

    def with_symbol(self, symbol: str) -> NoteConfiguration:
        return self._evolve(symbol=symbol)

    def with_top_level_links(self, links: list[CategoryLink]) -> NoteConfiguration:
        return self._evolve(top_level_links=tuple(links))

    def with_mid_level_links(self, links: list[CategoryLink]) -> NoteConfiguration:
        return self._evolve(mid_level_links=tuple(links))

    def with_classification(self, classification: ClassificationDescriptor) -> NoteConfiguration:
        return self._evolve(classification=classification)

    def with_paths(
        self,
        *,
        destination_path: str,
        metadata_template: str,
        body_template: str,
        footer_template: str | None = None,
    ) -> NoteConfiguration:
        return self._evolve(
            destination_path=destination_path,
            metadata_template=metadata_template,
            body_template=body_template,
            footer_template=footer_template,
        )

    @property
    def search_tag(self) -> str | None:
        """Derived search tag for top-level notes, None otherwise."""
        if self.symbol is None:
            return None
        return make_search_tag(self.symbol, self.title)

    def missing_fields(self) -> list[str]:
        """Return the names of fields still missing for this category."""
        missing: list[str] = []
        if not self.title:
            missing.append("title")
        if self.category is DocumentCategory.TOP_LEVEL and self.symbol is None:
            missing.append("symbol")
        if self.category is DocumentCategory.LEAF:
            if self.classification is None:
                missing.append("classification")
            if self.footer_template is None:
                missing.append("footer_template")
        for name in ("destination_path", "metadata_template", "body_template"):
            if getattr(self, name) is None:
                missing.append(name)
        return missing


class Fragments(BaseModel):
    """Loaded template fragment contents for one note."""

    model_config = {"frozen": True}

    metadata: str
    body: str
    footer: str | None = None


class DocumentTimestamps(BaseModel):
    """Creation and last-modified moments reported by the document store."""

    model_config = {"frozen": True}

    created: datetime
    modified: datetime
