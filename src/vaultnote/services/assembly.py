"""Template assembly: fragments + configuration -> final note text.

Pipeline: LOAD -> CUSTOMIZE METADATA -> ASSEMBLE

Metadata customization is exact-pattern substitution on the fragment
text. INVARIANT: a pattern that does not match is a warning, never an
error; the note is still produced, just less customized.
"""

from __future__ import annotations

from pathlib import Path
from typing import assert_never

from vaultnote.config.models import VaultNoteConfig
from vaultnote.domain.errors import ConfigurationError, StoreOperationError, TemplateError
from vaultnote.domain.models import (
    CategoryLink,
    DocumentTimestamps,
    Fragments,
    NoteConfiguration,
)
from vaultnote.domain.types import TOP_LEVEL_MARKER, DocumentCategory
from vaultnote.infrastructure.store import DocumentStore
from vaultnote.infrastructure.templates import render_template
from vaultnote.services.base import BaseService
from vaultnote.services.reporter import Reporter

SEPARATOR = "\n\n---\n\n"

TOP_LEVEL_TAG_PLACEHOLDER = f'  - "{TOP_LEVEL_MARKER}"\n  - ""'
PRIMARY_LINKS_PLACEHOLDER = "primary_categories: []"
SECONDARY_LINKS_PLACEHOLDER = "secondary_categories: []"


def link_block(heading: str, links: tuple[CategoryLink, ...] | list[CategoryLink]) -> str:
    """Render a YAML block list of category links under *heading*."""
    lines = [f"{heading}:"]
    lines.extend(f"  - {link.reference}" for link in links)
    return "\n".join(lines)


class TemplateAssembler(BaseService):
    """Loads, customizes, and concatenates a note's template fragments."""

    def __init__(
        self,
        store: DocumentStore,
        reporter: Reporter,
        config: VaultNoteConfig | None = None,
        *,
        template_root: Path | None = None,
    ) -> None:
        super().__init__(store, reporter, config)
        self._template_root = template_root
        self.warnings: list[str] = []

    # ------------------------------------------------------------------
    # LOAD
    # ------------------------------------------------------------------

    def load(self, config: NoteConfiguration) -> Fragments:
        """Read every fragment *config* references.

        Raises:
            TemplateError: A required fragment is missing or unreadable.
        """
        if config.metadata_template is None or config.body_template is None:
            raise ConfigurationError("Template references have not been resolved")

        metadata = self._read_fragment(config.metadata_template)
        body = self._read_fragment(config.body_template)
        footer = None
        if config.category is DocumentCategory.LEAF:
            if config.footer_template is None:
                raise ConfigurationError("Leaf notes require a footer template")
            footer = self._read_fragment(config.footer_template)
        return Fragments(metadata=metadata, body=body, footer=footer)

    def _read_fragment(self, path: str) -> str:
        if not self._store.exists(path):
            raise TemplateError("load", path, "template fragment not found")
        try:
            return self._store.read(path)
        except StoreOperationError as exc:
            raise TemplateError("load", path, str(exc)) from exc

    # ------------------------------------------------------------------
    # CUSTOMIZE
    # ------------------------------------------------------------------

    def customize_metadata(self, metadata: str, config: NoteConfiguration) -> str:
        """Substitute tag and link placeholders in the metadata fragment."""
        match config.category:
            case DocumentCategory.TOP_LEVEL:
                replacement = f'  - "{TOP_LEVEL_MARKER}"\n  - "{config.search_tag}"'
                return self._replace(metadata, TOP_LEVEL_TAG_PLACEHOLDER, replacement, "tag")
            case DocumentCategory.MID_LEVEL:
                return self._replace_links(
                    metadata,
                    PRIMARY_LINKS_PLACEHOLDER,
                    "primary_categories",
                    config.top_level_links,
                )
            case DocumentCategory.LEAF:
                metadata = self._replace_links(
                    metadata,
                    PRIMARY_LINKS_PLACEHOLDER,
                    "primary_categories",
                    config.top_level_links,
                )
                return self._replace_links(
                    metadata,
                    SECONDARY_LINKS_PLACEHOLDER,
                    "secondary_categories",
                    config.mid_level_links,
                )
            case DocumentCategory.LEAF_CLASSIFICATION:
                raise ConfigurationError("Content types are not assembled as notes")
            case _:
                assert_never(config.category)

    def _replace_links(
        self,
        metadata: str,
        placeholder: str,
        heading: str,
        links: tuple[CategoryLink, ...],
    ) -> str:
        if not links:
            return metadata
        return self._replace(metadata, placeholder, link_block(heading, links), heading)

    def _replace(self, metadata: str, pattern: str, replacement: str, what: str) -> str:
        if pattern not in metadata:
            message = f"Metadata template has no {what} placeholder; left uncustomized"
            self.warnings.append(message)
            self._reporter.warn(message, pattern=pattern)
            return metadata
        return metadata.replace(pattern, replacement, 1)

    # ------------------------------------------------------------------
    # ASSEMBLE
    # ------------------------------------------------------------------

    def timestamp_block(self, timestamps: DocumentTimestamps) -> str:
        return render_template(
            "document",
            "timestamps.md.j2",
            vault_root=self._template_root,
            created=timestamps.created,
            modified=timestamps.modified,
            timestamp_format=self._config.assembly.timestamp_format,
        ).strip()

    def assemble(
        self,
        metadata: str,
        fragments: Fragments,
        config: NoteConfiguration,
        timestamps: DocumentTimestamps,
    ) -> str:
        """Join header, body, (footer), and timestamps with the separator."""
        header = f"{metadata.rstrip()}\n# {config.title}"
        stamp = self.timestamp_block(timestamps)

        match config.category:
            case DocumentCategory.TOP_LEVEL | DocumentCategory.MID_LEVEL:
                parts = [header, fragments.body, stamp]
            case DocumentCategory.LEAF:
                parts = [header, fragments.body, fragments.footer or "", stamp]
            case DocumentCategory.LEAF_CLASSIFICATION:
                raise ConfigurationError("Content types are not assembled as notes")
            case _:
                assert_never(config.category)

        return SEPARATOR.join(part.strip("\n") for part in parts)

    def build_document(self, config: NoteConfiguration, timestamps: DocumentTimestamps) -> str:
        """Run the whole pipeline for a resolved configuration."""
        fragments = self.load(config)
        metadata = self.customize_metadata(fragments.metadata, config)
        return self.assemble(metadata, fragments, config, timestamps)
