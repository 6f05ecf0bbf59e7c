"""BaseService: shared construction for pipeline services.

Every service receives the document store, a reporter, and the vault
configuration at construction time. Nothing is module-global, so tests
can swap any of the three.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vaultnote.config.models import LayoutConfig, VaultNoteConfig

if TYPE_CHECKING:
    from vaultnote.infrastructure.store import DocumentStore
    from vaultnote.services.reporter import Reporter


class BaseService:
    """Base for services that read from or write to the document store."""

    def __init__(
        self,
        store: DocumentStore,
        reporter: Reporter,
        config: VaultNoteConfig | None = None,
    ) -> None:
        self._store = store
        self._reporter = reporter
        self._config = config or VaultNoteConfig()

    @property
    def layout(self) -> LayoutConfig:
        return self._config.layout
