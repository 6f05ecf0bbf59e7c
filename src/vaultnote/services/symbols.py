"""Symbol selection for new primary categories and content types.

:func:`choose_symbol` never fails: cancellation, a header pick, or an
exhausted manual entry all resolve to the configured default symbol.
"""

from __future__ import annotations

import random

from vaultnote.domain.errors import OperationCancelled
from vaultnote.domain.symbols import SYMBOL_GROUPS, symbol_pool
from vaultnote.domain.validation import validate_symbol
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.services.reporter import Reporter
from vaultnote.services.retry import retry_with_validation

MANUAL = "__manual__"
RANDOM = "__random__"
HEADER = "__header__"


def _menu() -> tuple[list[str], list[str]]:
    labels = ["✏️  Enter a symbol manually", "🎲 Pick one at random"]
    values = [MANUAL, RANDOM]
    for group, symbols in SYMBOL_GROUPS.items():
        labels.append(f"── {group} ──")
        values.append(HEADER)
        labels.extend(f"   {symbol}" for symbol in symbols)
        values.extend(symbols)
    return labels, values


def choose_symbol(
    prompter: Prompter,
    reporter: Reporter,
    context: str,
    *,
    default: str,
    max_attempts: int = 3,
    rng: random.Random | None = None,
) -> str:
    """Ask the user for a symbol to tag *context* with."""
    labels, values = _menu()
    picked = prompter.choice(labels, values, f"Choose a symbol for {context}:")

    if picked is None:
        reporter.warn(f"No symbol chosen; using default {default}")
        return default
    if picked == HEADER:
        reporter.warn(f"Group headers are not symbols; using default {default}")
        return default
    if picked == RANDOM:
        symbol = (rng or random).choice(symbol_pool())
        reporter.notice(f"Randomly picked {symbol}")
        return symbol
    if picked == MANUAL:
        try:
            return retry_with_validation(
                prompter,
                reporter,
                f"Symbol for {context}",
                validate_symbol,
                max_attempts=max_attempts,
                fallback=default,
            )
        except OperationCancelled:
            reporter.warn(f"Manual symbol entry aborted; using default {default}")
            return default
    return picked
