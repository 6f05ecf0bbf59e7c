"""Tests for interactive symbol selection."""

from __future__ import annotations

import random

from tests.conftest import RecordingReporter, ScriptedPrompter
from vaultnote.domain.symbols import SYMBOL_GROUPS, symbol_pool
from vaultnote.services.symbols import HEADER, MANUAL, RANDOM, choose_symbol

DEFAULT = "📌"


def choose(prompter: ScriptedPrompter, reporter: RecordingReporter, **kwargs: object) -> str:
    return choose_symbol(
        prompter, reporter, "'Red Team'", default=DEFAULT, **kwargs  # type: ignore[arg-type]
    )


class TestChooseSymbol:
    def test_menu_lists_actions_headers_and_symbols(self, reporter: RecordingReporter) -> None:
        prompter = ScriptedPrompter("🔴")
        choose(prompter, reporter)

        values = prompter.menus[0]
        assert values[:2] == [MANUAL, RANDOM]
        assert values.count(HEADER) == len(SYMBOL_GROUPS)
        assert [v for v in values if v not in (MANUAL, RANDOM, HEADER)] == symbol_pool()

    def test_picked_symbol_is_returned(self, reporter: RecordingReporter) -> None:
        assert choose(ScriptedPrompter("🦠"), reporter) == "🦠"
        assert reporter.warnings == []

    def test_cancel_uses_default(self, reporter: RecordingReporter) -> None:
        assert choose(ScriptedPrompter(None), reporter) == DEFAULT
        assert reporter.warnings == [f"No symbol chosen; using default {DEFAULT}"]

    def test_header_pick_uses_default(self, reporter: RecordingReporter) -> None:
        assert choose(ScriptedPrompter(HEADER), reporter) == DEFAULT
        assert len(reporter.warnings) == 1

    def test_random_pick_comes_from_pool(self, reporter: RecordingReporter) -> None:
        symbol = choose(ScriptedPrompter(RANDOM), reporter, rng=random.Random(7))
        assert symbol in symbol_pool()
        assert reporter.notices == [f"Randomly picked {symbol}"]

    def test_manual_entry_is_validated(self, reporter: RecordingReporter) -> None:
        prompter = ScriptedPrompter(MANUAL, "ab", "🦠")
        assert choose(prompter, reporter) == "🦠"
        assert len(prompter.text_prompts) == 2

    def test_manual_entry_cancelled_uses_default(self, reporter: RecordingReporter) -> None:
        assert choose(ScriptedPrompter(MANUAL, None), reporter) == DEFAULT

    def test_manual_entry_aborted_uses_default(self, reporter: RecordingReporter) -> None:
        prompter = ScriptedPrompter(MANUAL, "ab", "abort")
        assert choose(prompter, reporter, max_attempts=1) == DEFAULT
        assert reporter.warnings[-1] == f"Manual symbol entry aborted; using default {DEFAULT}"
