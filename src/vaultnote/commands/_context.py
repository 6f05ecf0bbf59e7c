"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the document store and reporter lazily and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultnote.output.formatters import format_result

if TYPE_CHECKING:
    from vaultnote.config.models import VaultNoteConfig
    from vaultnote.config.settings import VaultNoteSettings
    from vaultnote.infrastructure.store import FileDocumentStore
    from vaultnote.services.reporter import StructlogReporter
    from vaultnote.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: VaultNoteSettings) -> None:
        self.settings = settings
        self._store: FileDocumentStore | None = None
        self._reporter: StructlogReporter | None = None

        from vaultnote.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            vault_root=settings.vault_root,
        )

    @property
    def config(self) -> VaultNoteConfig:
        return self.settings.to_config()

    @property
    def store(self) -> FileDocumentStore:
        """Document store over the vault root (created on first access)."""
        if self._store is None:
            from vaultnote.infrastructure.store import FileDocumentStore

            self._store = FileDocumentStore(self.settings.vault_root)
        return self._store

    @property
    def reporter(self) -> StructlogReporter:
        if self._reporter is None:
            from vaultnote.services.reporter import StructlogReporter

            self._reporter = StructlogReporter()
        return self._reporter

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally. Warnings were
          already shown live by the reporter.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
