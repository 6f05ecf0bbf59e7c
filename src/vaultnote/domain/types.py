"""Document categories and the structural markers that identify them.

Three categories are built in (primary, secondary, content note). Each
content note additionally belongs to a classification (content type),
and classifications themselves form the fourth kind of entry.
"""

from __future__ import annotations

from enum import StrEnum


class DocumentCategory(StrEnum):
    """Kinds of document the generator knows how to produce."""

    TOP_LEVEL = "top"
    MID_LEVEL = "mid"
    LEAF = "leaf"
    LEAF_CLASSIFICATION = "classification"


# Structural marker tags. Reserved: never assignable as a user symbol.
TOP_LEVEL_MARKER = "🗂️"
MID_LEVEL_MARKER = "📂"
CLASSIFICATION_MARKER = "🏷️"

STRUCTURAL_MARKERS: dict[DocumentCategory, str] = {
    DocumentCategory.TOP_LEVEL: TOP_LEVEL_MARKER,
    DocumentCategory.MID_LEVEL: MID_LEVEL_MARKER,
    DocumentCategory.LEAF_CLASSIFICATION: CLASSIFICATION_MARKER,
}

# Tags skipped when reading a classification's own tag out of its metadata.
CATEGORY_MARKERS = frozenset({TOP_LEVEL_MARKER, MID_LEVEL_MARKER})

CATEGORY_LABELS: dict[DocumentCategory, str] = {
    DocumentCategory.TOP_LEVEL: "Primary category",
    DocumentCategory.MID_LEVEL: "Secondary category",
    DocumentCategory.LEAF: "Content note",
    DocumentCategory.LEAF_CLASSIFICATION: "Content type",
}
