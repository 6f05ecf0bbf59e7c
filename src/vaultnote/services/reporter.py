"""Reporter: the injected channel for log events and user-facing notices.

Pipeline components never write to the terminal or a global logger
directly; they receive a :class:`Reporter`. ``notice`` is for messages
the user should see even without ``--verbose``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

import click
import structlog


class Reporter(Protocol):
    """Observer interface passed into every pipeline component."""

    def debug(self, event: str, **fields: Any) -> None: ...

    def info(self, event: str, **fields: Any) -> None: ...

    def warn(self, event: str, **fields: Any) -> None: ...

    def error(self, event: str, **fields: Any) -> None: ...

    def notice(self, message: str) -> None: ...


class StructlogReporter:
    """Forward events to structlog and echo warnings/notices to stderr.

    Warnings are also collected in :attr:`warnings` so the command can
    attach them to its ServiceResult.
    """

    def __init__(
        self,
        logger: Any = None,
        *,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self._log = logger or structlog.get_logger("vaultnote")
        self._echo = echo or (lambda message: click.echo(message, err=True))
        self.warnings: list[str] = []

    def debug(self, event: str, **fields: Any) -> None:
        self._log.debug(event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._log.info(event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._log.warning(event, **fields)
        self.warnings.append(event)
        self._echo(click.style(f"WARNING: {event}", fg="yellow"))

    def error(self, event: str, **fields: Any) -> None:
        self._log.error(event, **fields)
        self._echo(click.style(f"ERROR: {event}", fg="red"))

    def notice(self, message: str) -> None:
        self._log.info("notice", message=message)
        self._echo(message)
