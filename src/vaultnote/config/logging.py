"""structlog setup for vaultnote.

Logs always go to stderr so they never mix with command results on
stdout. ``--log-json`` switches the console renderer for JSON lines.
Every event carries the vault it concerns once one is known.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_LOGGER = "vaultnote"


def _vault_tagger(vault_root: Path | None) -> Processor:
    vault = str(vault_root) if vault_root is not None else None

    def add_vault(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
        if vault is not None:
            event_dict.setdefault("vault", vault)
        return event_dict

    return add_vault


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    vault_root: Path | None = None,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: Show vaultnote's DEBUG events. Otherwise WARNING and up.
        log_json: Render JSON lines instead of console output.
        vault_root: Added to every event as ``vault`` when given.
    """
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _vault_tagger(vault_root),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    # Third-party libraries stay at WARNING regardless of --verbose.
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


@contextmanager
def bound_context(**values: Any) -> Iterator[None]:
    """Attach *values* to every log event emitted inside the block.

    Used by the workflow to tag events with the note being generated.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
