"""Tests for the structlog-backed reporter."""

from __future__ import annotations

from typing import Any

import click

from vaultnote.services.reporter import StructlogReporter


class FakeLogger:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def __getattr__(self, level: str) -> Any:
        def log(event: str, **fields: Any) -> None:
            self.calls.append((level, event, fields))

        return log


def make_reporter() -> tuple[StructlogReporter, FakeLogger, list[str]]:
    logger = FakeLogger()
    echoed: list[str] = []
    return StructlogReporter(logger, echo=echoed.append), logger, echoed


class TestStructlogReporter:
    def test_debug_and_info_are_not_echoed(self) -> None:
        reporter, logger, echoed = make_reporter()
        reporter.debug("scan", count=2)
        reporter.info("done")
        assert logger.calls == [("debug", "scan", {"count": 2}), ("info", "done", {})]
        assert echoed == []

    def test_warnings_are_collected_and_echoed(self) -> None:
        reporter, logger, echoed = make_reporter()
        reporter.warn("No symbol chosen", default="📌")
        assert reporter.warnings == ["No symbol chosen"]
        assert logger.calls == [("warning", "No symbol chosen", {"default": "📌"})]
        assert [click.unstyle(line) for line in echoed] == ["WARNING: No symbol chosen"]

    def test_errors_are_echoed(self) -> None:
        reporter, _logger, echoed = make_reporter()
        reporter.error("move failed")
        assert click.unstyle(echoed[0]) == "ERROR: move failed"
        assert reporter.warnings == []

    def test_notice_echoes_plain_message(self) -> None:
        reporter, logger, echoed = make_reporter()
        reporter.notice("Randomly picked 🦠")
        assert echoed == ["Randomly picked 🦠"]
        assert logger.calls == [("info", "notice", {"message": "Randomly picked 🦠"})]
