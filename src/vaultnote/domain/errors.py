"""Exception taxonomy for the note generation workflow.

Validation problems are not exceptions: validators return a
:class:`~vaultnote.domain.validation.ValidationVerdict` and the retry
engine resolves them interactively. Everything here propagates to the
workflow orchestrator, which turns it into a fallback document.
"""

from __future__ import annotations


class VaultNoteError(Exception):
    """Base class for all vaultnote failures."""


class OperationCancelled(VaultNoteError):
    """The user aborted a prompt and no fallback value was available."""


class ConfigurationError(VaultNoteError):
    """A programming-level invariant was violated (never user-recoverable)."""


class StoreOperationError(VaultNoteError):
    """A read/write/move/create against the document store failed."""

    def __init__(self, op: str, path: str, message: str) -> None:
        super().__init__(f"{op} failed for {path!r}: {message}")
        self.op = op
        self.path = path


class TemplateError(StoreOperationError):
    """A required template fragment is missing or unreadable."""
