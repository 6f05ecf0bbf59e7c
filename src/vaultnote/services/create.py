"""CreateService: runs the note workflow on behalf of the ``new`` command.

Pipeline: DRAFT -> WORKFLOW -> PERSIST -> RESPOND
"""

from __future__ import annotations

from pathlib import Path

from vaultnote.domain.errors import StoreOperationError
from vaultnote.domain.types import DocumentCategory
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.infrastructure.store import join_path
from vaultnote.services.base import BaseService
from vaultnote.services.result import ServiceResult
from vaultnote.services.workflow import NoteWorkflow

DRAFT_STEM = "Untitled"


class CreateService(BaseService):
    """Creates notes from an in-progress draft."""

    def new_draft(self) -> str:
        """Create an empty draft in the inbox and return its path."""
        inbox = self.layout.inbox_dir
        candidate = join_path(inbox, f"{DRAFT_STEM}.md")
        counter = 1
        while self._store.exists(candidate):
            candidate = join_path(inbox, f"{DRAFT_STEM} {counter}.md")
            counter += 1
        self._store.create(candidate, "")
        return candidate

    def new_note(
        self,
        prompter: Prompter,
        *,
        category: DocumentCategory | None = None,
        source: str | None = None,
        template_root: Path | None = None,
    ) -> ServiceResult:
        """Generate a note, writing the result into the relocated document.

        The result is ``ok`` even when the fallback document was used;
        ``data["fallback"]`` tells the two apart.
        """
        op = "new_note"
        try:
            if source is None:
                document = self.new_draft()
            elif not self._store.exists(source):
                return ServiceResult.failure(
                    op, "NOT_FOUND", f"No document at {source}", path=source
                )
            else:
                document = source
        except StoreOperationError as exc:
            return ServiceResult.failure(op, "STORE_ERROR", str(exc), path=exc.path)

        workflow = NoteWorkflow(
            self._store,
            self._reporter,
            prompter,
            self._config,
            template_root=template_root,
        )
        outcome = workflow.run(document, category)

        try:
            self._store.write(outcome.path, outcome.text + "\n")
        except StoreOperationError as exc:
            return ServiceResult.failure(op, "STORE_ERROR", str(exc), path=exc.path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": outcome.path,
                "category": str(outcome.category) if outcome.category else None,
                "fallback": outcome.fallback,
            },
            warnings=outcome.warnings,
        )
