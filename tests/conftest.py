"""Shared pytest fixtures and test doubles for vaultnote tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from vaultnote.config.models import VaultNoteConfig
from vaultnote.infrastructure.store import FileDocumentStore
from vaultnote.services.init import InitService


class ScriptedPrompter:
    """Prompter double that replays canned answers in order.

    ``None`` in the script means the user cancelled. Every prompt is
    recorded as ``(kind, message, values)`` so tests can assert on what
    was offered.
    """

    def __init__(self, *answers: Any) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str, list[Any] | None]] = []

    def text(self, message: str) -> str | None:
        self.calls.append(("text", message, None))
        return self._next(message)

    def choice(self, labels: Sequence[str], values: Sequence[Any], message: str) -> Any:
        assert len(labels) == len(values)
        self.calls.append(("choice", message, list(values)))
        return self._next(message)

    def _next(self, message: str) -> Any:
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message!r}")
        return self.answers.pop(0)

    @property
    def text_prompts(self) -> list[str]:
        return [message for kind, message, _ in self.calls if kind == "text"]

    @property
    def menus(self) -> list[list[Any]]:
        return [values for kind, _, values in self.calls if kind == "choice" and values is not None]


class RecordingReporter:
    """Reporter double that keeps every event for later assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []
        self.notices: list[str] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.events.append(("debug", event, fields))

    def info(self, event: str, **fields: Any) -> None:
        self.events.append(("info", event, fields))

    def warn(self, event: str, **fields: Any) -> None:
        self.events.append(("warning", event, fields))

    def error(self, event: str, **fields: Any) -> None:
        self.events.append(("error", event, fields))

    def notice(self, message: str) -> None:
        self.notices.append(message)

    @property
    def warnings(self) -> list[str]:
        return [event for level, event, _ in self.events if level == "warning"]

    @property
    def errors(self) -> list[str]:
        return [event for level, event, _ in self.events if level == "error"]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault with the default layout and packaged templates.

    This is the single source of truth for the vault layout used by
    service and command tests.
    """
    result = InitService.init_vault(tmp_path)
    assert result.ok, result.error
    return tmp_path


@pytest.fixture
def store(vault_root: Path) -> FileDocumentStore:
    return FileDocumentStore(vault_root)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def config() -> VaultNoteConfig:
    return VaultNoteConfig()


@pytest.fixture
def prompter_factory() -> type[ScriptedPrompter]:
    """The scripted prompter class, so tests can build one per scenario."""
    return ScriptedPrompter


@pytest.fixture
def add_category_notes(store: FileDocumentStore, config: VaultNoteConfig) -> Any:
    """Create empty category notes: ``add_category_notes(top=[...], mid=[...])``."""

    def _add(top: Sequence[str] = (), mid: Sequence[str] = ()) -> None:
        for name in top:
            store.create(f"{config.layout.top_level_dir}/{name}.md", f"# {name}\n")
        for name in mid:
            store.create(f"{config.layout.mid_level_dir}/{name}.md", f"# {name}\n")

    return _add
