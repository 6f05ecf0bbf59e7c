"""Input validators for titles and symbol tags.

Every validator returns a :class:`ValidationVerdict` and never raises.
INVARIANT: validators fail open. An unexpected internal error yields a
valid verdict so a validator bug can never block note creation; bad
filenames still surface later as store errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import regex

from vaultnote.domain.types import STRUCTURAL_MARKERS

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100

# Characters rejected by at least one mainstream filesystem.
ILLEGAL_TITLE_CHARS = '<>:"/\\|?*'

# Titles that are really "no title yet".
PLACEHOLDER_TITLES = frozenset({"untitled", "untitled note", "new note"})

_RESERVED_NAME_RE = regex.compile(
    r"^(CON|PRN|AUX|NUL|COM[1-9]|LPT[1-9])(\..*)?$",
    regex.IGNORECASE,
)

ZERO_WIDTH_JOINER = "\u200d"

# Zero-width and formatting characters that render as nothing.
# ZWJ is handled separately: it is legitimate inside compound emoji.
_INVISIBLE_RE = regex.compile(r"[\u00ad\u200b\u200c\u200e\u200f\u2060-\u2064\ufeff]")

_EMOJI_RE = regex.compile(r"\p{Extended_Pictographic}")
_TEXT_RE = regex.compile(r"[\p{L}\p{N}]")

# Broad emoji/symbol code-point ranges a tag symbol must start in.
_SYMBOL_RE = regex.compile(
    r"^[\p{Extended_Pictographic}\p{So}"
    r"\U0001F1E6-\U0001F1FF"  # regional indicators (flags)
    r"\u2190-\u21ff\u2300-\u23ff\u25a0-\u27bf\u2900-\u297f\u2b00-\u2bff]"
)

_GRAPHEME_RE = regex.compile(r"\X")
_VARIATION_SELECTOR = "\ufe0f"


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating one candidate value.

    Attributes:
        valid: Whether the candidate may be used as-is.
        error: Human-readable reason when invalid.
        suggestion: Optional hint for a better value.
        overridable: The user may accept an invalid value anyway.
    """

    valid: bool
    error: str | None = None
    suggestion: str | None = None
    overridable: bool = False

    @classmethod
    def ok(cls) -> ValidationVerdict:
        return cls(valid=True)

    @classmethod
    def fail(
        cls,
        error: str,
        suggestion: str | None = None,
        *,
        overridable: bool = False,
    ) -> ValidationVerdict:
        return cls(valid=False, error=error, suggestion=suggestion, overridable=overridable)


def illegal_characters(candidate: str) -> list[str]:
    """Return the illegal filename characters in *candidate*, deduplicated in order."""
    found: list[str] = []
    for char in candidate:
        if char in ILLEGAL_TITLE_CHARS and char not in found:
            found.append(char)
    return found


def grapheme_clusters(text: str) -> list[str]:
    """Split *text* into user-perceived characters."""
    return _GRAPHEME_RE.findall(text)


def _strip_variation(symbol: str) -> str:
    return symbol.replace(_VARIATION_SELECTOR, "")


_RESERVED_SYMBOLS = frozenset(_strip_variation(m) for m in STRUCTURAL_MARKERS.values())


# ---------------------------------------------------------------------------
# Title validation
# ---------------------------------------------------------------------------


def validate_title(
    candidate: str,
    destination: str | None = None,
    *,
    exists: Callable[[str], bool] | None = None,
) -> ValidationVerdict:
    """Check that *candidate* is a safe, portable note title.

    Args:
        candidate: The proposed title (becomes the filename stem).
        destination: Vault-relative directory the note will live in.
            Together with *exists* this enables the collision check.
        exists: Store lookup used to detect an existing note at
            ``{destination}/{candidate}.md``.
    """
    try:
        return _check_title(candidate, destination, exists)
    except Exception:
        logger.debug("Title validation failed internally; allowing %r", candidate, exc_info=True)
        return ValidationVerdict.ok()


def _check_title(
    candidate: str,
    destination: str | None,
    exists: Callable[[str], bool] | None,
) -> ValidationVerdict:
    stripped = candidate.strip()
    if not stripped or stripped.lower() in PLACEHOLDER_TITLES:
        return ValidationVerdict.fail(
            "Title cannot be empty",
            "Enter a descriptive name, e.g. 'Red Team'",
        )

    if candidate.startswith("."):
        return ValidationVerdict.fail(
            "Title cannot start with a dot (the file would be hidden)",
            candidate.lstrip(".").strip() or None,
        )

    illegal = illegal_characters(candidate)
    if illegal:
        cleaned = "".join(c for c in candidate if c not in ILLEGAL_TITLE_CHARS).strip()
        return ValidationVerdict.fail(
            f"Title contains illegal characters: {' '.join(illegal)}",
            cleaned or None,
        )

    if _RESERVED_NAME_RE.match(stripped):
        return ValidationVerdict.fail(
            f"'{stripped}' is a reserved device name on Windows",
            f"{stripped} Notes",
        )

    if len(candidate) > MAX_TITLE_LENGTH:
        return ValidationVerdict.fail(
            f"Title is too long ({len(candidate)} > {MAX_TITLE_LENGTH} characters)",
            candidate[:MAX_TITLE_LENGTH].rstrip(". "),
        )

    if candidate != candidate.rstrip(". "):
        return ValidationVerdict.fail(
            "Title cannot end with a dot or a space",
            candidate.rstrip(". "),
        )

    if _INVISIBLE_RE.search(candidate):
        return ValidationVerdict.fail(
            "Title contains invisible characters",
            _INVISIBLE_RE.sub("", candidate),
        )

    if _EMOJI_RE.search(candidate) and _TEXT_RE.search(candidate):
        return ValidationVerdict.fail(
            "Title mixes emoji and text",
            "Use either plain text or emoji only; add symbols as tags instead",
        )

    if destination is not None and exists is not None:
        target = f"{destination.rstrip('/')}/{candidate}.md" if destination else f"{candidate}.md"
        if exists(target):
            return ValidationVerdict.fail(
                f"A note already exists at {target}",
                f"{candidate} 2",
            )

    return ValidationVerdict.ok()


# ---------------------------------------------------------------------------
# Symbol validation
# ---------------------------------------------------------------------------


def validate_symbol(candidate: str) -> ValidationVerdict:
    """Check that *candidate* is a single emoji/symbol usable as a tag prefix.

    A zero-width-joiner sequence that passes every other rule is reported
    as overridable: it is a valid glyph but may render as several symbols
    in some tag panes.
    """
    try:
        return _check_symbol(candidate)
    except Exception:
        logger.debug("Symbol validation failed internally; allowing %r", candidate, exc_info=True)
        return ValidationVerdict.ok()


def _check_symbol(candidate: str) -> ValidationVerdict:
    if not candidate:
        return ValidationVerdict.fail("Symbol cannot be empty", "Try 🔴 or 📚")

    if not _SYMBOL_RE.match(candidate):
        return ValidationVerdict.fail(
            "Symbol must be an emoji or pictographic character",
            "Pick one from the symbol menu instead",
        )

    if _INVISIBLE_RE.search(candidate) or any(c.isspace() for c in candidate):
        return ValidationVerdict.fail(
            "Symbol contains whitespace or invisible characters",
            _INVISIBLE_RE.sub("", "".join(candidate.split())) or None,
        )

    clusters = grapheme_clusters(candidate)
    if len(clusters) != 1:
        return ValidationVerdict.fail(
            f"Symbol must be exactly one character (got {len(clusters)})",
            clusters[0],
        )

    if _strip_variation(candidate) in _RESERVED_SYMBOLS:
        return ValidationVerdict.fail(
            f"{candidate} is reserved for built-in categories",
            "Choose a different symbol",
        )

    # Only reached once every hard rule passed.
    if ZERO_WIDTH_JOINER in candidate:
        return ValidationVerdict.fail(
            "Symbol is a zero-width-joiner sequence and may render as several glyphs",
            "A single-codepoint emoji displays more reliably",
            overridable=True,
        )

    return ValidationVerdict.ok()
