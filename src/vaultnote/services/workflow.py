"""NoteWorkflow: end-to-end orchestration of one note generation.

Pipeline: CATEGORY -> BUILD -> RELOCATE -> ASSEMBLE -> RESPOND

INVARIANT: the caller always gets usable text. Any failure that escapes
the pipeline (cancellation, configuration or store errors) is logged and
replaced by a minimal fallback document.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from vaultnote.config.logging import bound_context
from vaultnote.config.models import VaultNoteConfig
from vaultnote.domain.errors import OperationCancelled, StoreOperationError, VaultNoteError
from vaultnote.domain.models import DocumentTimestamps
from vaultnote.domain.types import CATEGORY_LABELS, DocumentCategory
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.infrastructure.store import DocumentStore
from vaultnote.infrastructure.templates import render_template
from vaultnote.services.assembly import TemplateAssembler
from vaultnote.services.base import BaseService
from vaultnote.services.builder import BUILDABLE_CATEGORIES, ConfigurationBuilder
from vaultnote.services.reporter import Reporter

logger = logging.getLogger(__name__)


class WorkflowOutcome(BaseModel):
    """What one workflow run produced."""

    model_config = {"frozen": True}

    text: str
    path: str
    category: DocumentCategory | None = None
    fallback: bool = False
    warnings: list[str] = Field(default_factory=list)


class NoteWorkflow(BaseService):
    """Generates the content of an in-progress document interactively."""

    def __init__(
        self,
        store: DocumentStore,
        reporter: Reporter,
        prompter: Prompter,
        config: VaultNoteConfig | None = None,
        *,
        template_root: Path | None = None,
    ) -> None:
        super().__init__(store, reporter, config)
        self._prompter = prompter
        self._template_root = template_root

    def run(self, document: str, category: DocumentCategory | None = None) -> WorkflowOutcome:
        """Build, relocate, and assemble the note currently at *document*.

        Args:
            document: Vault-relative path of the in-progress note.
            category: Kind of note; asked interactively when omitted.
        """
        current_title = PurePosixPath(document).stem
        builder = ConfigurationBuilder(self._store, self._reporter, self._prompter, self._config)
        assembler = TemplateAssembler(
            self._store,
            self._reporter,
            self._config,
            template_root=self._template_root,
        )
        path = document

        with bound_context(document=document):
            try:
                if category is None:
                    category = self._choose_category()
                # BUILD
                config = builder.build(category, current_title=current_title)
                # RELOCATE
                path = self._relocate(document, config.destination_path or document)
                # ASSEMBLE
                text = assembler.build_document(config, self._store.timestamps(path))
            except Exception as exc:
                return self._fallback(
                    path,
                    builder.working_title or current_title,
                    category,
                    exc,
                    assembler,
                )

        self._reporter.info("note generated", path=path, category=str(category))
        return WorkflowOutcome(
            text=text.rstrip(),
            path=path,
            category=category,
            warnings=list(assembler.warnings),
        )

    def _choose_category(self) -> DocumentCategory:
        labels = [CATEGORY_LABELS[c] for c in BUILDABLE_CATEGORIES]
        picked = self._prompter.choice(labels, list(BUILDABLE_CATEGORIES), "What are you creating?")
        if picked is None:
            raise OperationCancelled("No document category chosen")
        return picked

    def _relocate(self, document: str, destination: str) -> str:
        try:
            return self._store.move(document, destination)
        except StoreOperationError as exc:
            raise StoreOperationError(
                "relocate",
                document,
                f"could not move to {destination!r}: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    def _fallback(
        self,
        path: str,
        title: str,
        category: DocumentCategory | None,
        exc: Exception,
        assembler: TemplateAssembler,
    ) -> WorkflowOutcome:
        if isinstance(exc, OperationCancelled):
            self._reporter.warn(f"Note generation cancelled: {exc}")
        elif isinstance(exc, VaultNoteError):
            self._reporter.error(f"Note generation failed: {exc}", error_type=type(exc).__name__)
        else:
            logger.exception("Unexpected failure during note generation")
            self._reporter.error(f"Unexpected error: {exc}", error_type=type(exc).__name__)

        text = render_template(
            "document",
            "fallback.md.j2",
            vault_root=self._template_root,
            title=title,
            reason=str(exc),
            timestamps=assembler.timestamp_block(self._fallback_timestamps(path)),
        )
        return WorkflowOutcome(
            text=text.rstrip(),
            path=path,
            category=category,
            fallback=True,
            warnings=[*assembler.warnings, str(exc)],
        )

    def _fallback_timestamps(self, path: str) -> DocumentTimestamps:
        try:
            return self._store.timestamps(path)
        except StoreOperationError:
            now = datetime.now().astimezone()
            return DocumentTimestamps(created=now, modified=now)
