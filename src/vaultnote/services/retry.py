"""Generic prompt-validate-retry loop.

The engine knows nothing about what it validates: any callable that
returns a :class:`ValidationVerdict` plugs in.

Flow for ``attempt = 1..max_attempts``:

1. Prompt (message decorated with the remaining attempts).
2. Cancelled prompt: return the fallback, or abort.
3. Valid value: return it.
4. Invalid value: report error + suggestion; overridable verdicts offer
   "use anyway" / "try again".

After the last attempt a recovery menu offers one more try, the
fallback (when one exists), or abort.
"""

from __future__ import annotations

from collections.abc import Callable

from vaultnote.domain.errors import OperationCancelled
from vaultnote.domain.validation import ValidationVerdict
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.services.reporter import Reporter

Validator = Callable[[str], ValidationVerdict]

_OVERRIDE_USE = "use"
_OVERRIDE_RETRY = "retry"

_RECOVER_RETRY = "retry"
_RECOVER_FALLBACK = "fallback"
_RECOVER_ABORT = "abort"


def retry_with_validation(
    prompter: Prompter,
    reporter: Reporter,
    prompt_text: str,
    validate: Validator,
    *,
    max_attempts: int = 3,
    fallback: str | None = None,
) -> str:
    """Prompt until *validate* accepts a value.

    Raises:
        OperationCancelled: The user aborted and no fallback was supplied.
    """
    for attempt in range(1, max_attempts + 1):
        remaining = max_attempts - attempt + 1
        plural = "attempt" if remaining == 1 else "attempts"
        value = prompter.text(f"{prompt_text} ({remaining} {plural} left)")
        if value is None:
            return _fallback_or_abort(reporter, prompt_text, fallback)

        accepted = _evaluate(prompter, reporter, value, validate)
        if accepted is not None:
            return accepted
        reporter.debug("validation failed", prompt=prompt_text, attempt=attempt)

    return _recover(prompter, reporter, prompt_text, validate, fallback)


def _evaluate(
    prompter: Prompter,
    reporter: Reporter,
    value: str,
    validate: Validator,
) -> str | None:
    """Return *value* if it is valid or the user overrides, else None."""
    verdict = validate(value)
    if verdict.valid:
        return value

    reporter.warn(verdict.error or "Invalid value")
    if verdict.suggestion:
        reporter.notice(f"Suggestion: {verdict.suggestion}")

    if verdict.overridable:
        decision = prompter.choice(
            ["Use it anyway", "Try again"],
            [_OVERRIDE_USE, _OVERRIDE_RETRY],
            f"{verdict.error}. Use {value!r} anyway?",
        )
        if decision == _OVERRIDE_USE:
            reporter.info("validation overridden", value=value)
            return value
    return None


def _recover(
    prompter: Prompter,
    reporter: Reporter,
    prompt_text: str,
    validate: Validator,
    fallback: str | None,
) -> str:
    while True:
        labels = ["Try once more"]
        values = [_RECOVER_RETRY]
        if fallback is not None:
            labels.append(f"Use fallback: {fallback}")
            values.append(_RECOVER_FALLBACK)
        labels.append("Abort")
        values.append(_RECOVER_ABORT)

        decision = prompter.choice(labels, values, "No valid value entered. What now?")
        if decision == _RECOVER_RETRY:
            value = prompter.text(f"{prompt_text} (last try)")
            if value is None:
                continue
            accepted = _evaluate(prompter, reporter, value, validate)
            if accepted is not None:
                return accepted
            continue
        if decision == _RECOVER_ABORT:
            raise OperationCancelled(f"Aborted while prompting for: {prompt_text}")
        # Explicit fallback choice or a cancelled menu.
        return _fallback_or_abort(reporter, prompt_text, fallback)


def _fallback_or_abort(reporter: Reporter, prompt_text: str, fallback: str | None) -> str:
    if fallback is None:
        raise OperationCancelled(f"Cancelled while prompting for: {prompt_text}")
    reporter.notice(f"Using fallback value: {fallback}")
    return fallback
