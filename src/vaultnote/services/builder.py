"""Configuration builder: collects every choice needed for one note.

Dispatch is an exhaustive match over :class:`DocumentCategory`:

- top-level: title, symbol
- mid-level: title, primary category links
- leaf: title, primary + secondary links, content type

Each step returns a new :class:`NoteConfiguration`; path resolution
then fills in the destination and template fragment references.
"""

from __future__ import annotations

from typing import assert_never

from vaultnote.config.models import VaultNoteConfig
from vaultnote.domain.errors import ConfigurationError
from vaultnote.domain.models import NoteConfiguration
from vaultnote.domain.types import CATEGORY_LABELS, DocumentCategory
from vaultnote.domain.validation import ValidationVerdict, validate_title
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.infrastructure.store import DocumentStore, join_path
from vaultnote.services.base import BaseService
from vaultnote.services.categories import CategoryRegistry
from vaultnote.services.classifications import (
    BODY_FRAGMENT,
    FOOTER_FRAGMENT,
    METADATA_FRAGMENT,
    ClassificationRegistry,
)
from vaultnote.services.reporter import Reporter
from vaultnote.services.retry import retry_with_validation
from vaultnote.services.symbols import choose_symbol

BUILDABLE_CATEGORIES = (
    DocumentCategory.TOP_LEVEL,
    DocumentCategory.MID_LEVEL,
    DocumentCategory.LEAF,
)


class ConfigurationBuilder(BaseService):
    """Drives the interactive selection steps for one workflow run."""

    def __init__(
        self,
        store: DocumentStore,
        reporter: Reporter,
        prompter: Prompter,
        config: VaultNoteConfig | None = None,
    ) -> None:
        super().__init__(store, reporter, config)
        self._prompter = prompter
        self.categories = CategoryRegistry(store, reporter, self._config)
        self.classifications = ClassificationRegistry(store, reporter, self._config)
        # Last title the user settled on; read by the orchestrator on failure.
        self.working_title: str | None = None

    def destination_dir(self, category: DocumentCategory) -> str:
        match category:
            case DocumentCategory.TOP_LEVEL:
                return self.layout.top_level_dir
            case DocumentCategory.MID_LEVEL:
                return self.layout.mid_level_dir
            case DocumentCategory.LEAF:
                return self.layout.leaf_dir
            case DocumentCategory.LEAF_CLASSIFICATION:
                raise ConfigurationError("Content types are not generated as notes")
            case _:
                assert_never(category)

    def build(
        self,
        category: DocumentCategory,
        *,
        current_title: str | None = None,
    ) -> NoteConfiguration:
        """Run every selection step for *category*.

        Args:
            category: Kind of note to build.
            current_title: Title of the in-progress document, offered as
                the fallback when no valid title is entered.

        Raises:
            ConfigurationError: *category* cannot be built.
            OperationCancelled: The user aborted a required prompt.
        """
        if category not in BUILDABLE_CATEGORIES:
            msg = f"Unsupported document category: {category!r}"
            raise ConfigurationError(msg)

        config = NoteConfiguration(category=category)
        config = config.with_title(self._collect_title(category, current_title))

        match category:
            case DocumentCategory.TOP_LEVEL:
                symbol = choose_symbol(
                    self._prompter,
                    self._reporter,
                    f"'{config.title}'",
                    default=self._config.symbols.default,
                    max_attempts=self._config.prompts.max_attempts,
                )
                config = config.with_symbol(symbol)
            case DocumentCategory.MID_LEVEL:
                config = config.with_top_level_links(
                    self.categories.select_multiple(DocumentCategory.TOP_LEVEL, self._prompter)
                )
            case DocumentCategory.LEAF:
                config = config.with_top_level_links(
                    self.categories.select_multiple(DocumentCategory.TOP_LEVEL, self._prompter)
                )
                config = config.with_mid_level_links(
                    self.categories.select_multiple(DocumentCategory.MID_LEVEL, self._prompter)
                )
                config = config.with_classification(
                    self.classifications.select_or_create(self._prompter)
                )
            case _:
                msg = f"Unsupported document category: {category!r}"
                raise ConfigurationError(msg)

        return self.resolve_paths(config)

    def _collect_title(self, category: DocumentCategory, current_title: str | None) -> str:
        destination = self.destination_dir(category)
        label = CATEGORY_LABELS[category]

        def _validate(candidate: str) -> ValidationVerdict:
            return validate_title(candidate, destination, exists=self._store.exists)

        fallback = current_title if current_title else None
        title = retry_with_validation(
            self._prompter,
            self._reporter,
            f"{label} title",
            _validate,
            max_attempts=self._config.prompts.max_attempts,
            fallback=fallback,
        )
        self.working_title = title
        return title

    def resolve_paths(self, config: NoteConfiguration) -> NoteConfiguration:
        """Fill in the destination path and template fragment references."""
        layout = self.layout
        destination = join_path(self.destination_dir(config.category), f"{config.title}.md")

        match config.category:
            case DocumentCategory.TOP_LEVEL:
                template_dir = join_path(layout.template_dir, layout.top_level_templates)
                footer = None
            case DocumentCategory.MID_LEVEL:
                template_dir = join_path(layout.template_dir, layout.mid_level_templates)
                footer = None
            case DocumentCategory.LEAF:
                if config.classification is None:
                    raise ConfigurationError("Leaf notes require a content type")
                template_dir = self.classifications.template_dir(config.classification.name)
                footer = join_path(template_dir, FOOTER_FRAGMENT)
            case _:
                msg = f"Unsupported document category: {config.category!r}"
                raise ConfigurationError(msg)

        resolved = config.with_paths(
            destination_path=destination,
            metadata_template=join_path(template_dir, METADATA_FRAGMENT),
            body_template=join_path(template_dir, BODY_FRAGMENT),
            footer_template=footer,
        )
        missing = resolved.missing_fields()
        if missing:
            msg = f"Incomplete {config.category} configuration, missing: {', '.join(missing)}"
            raise ConfigurationError(msg)
        self._reporter.debug(
            "configuration resolved",
            category=str(resolved.category),
            destination=resolved.destination_path,
        )
        return resolved
