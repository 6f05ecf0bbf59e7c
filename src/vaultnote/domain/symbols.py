"""Curated symbol catalog offered when choosing a category symbol.

Groups are display-only headers; only the symbols inside them are
selectable. No entry may be a structural marker or a joiner sequence.
"""

from __future__ import annotations

SYMBOL_GROUPS: dict[str, tuple[str, ...]] = {
    "Offensive": ("🔴", "🎯", "💣", "🗡️", "🕷️", "🧨"),
    "Defensive": ("🔵", "🛡️", "🔒", "🔐", "🧱", "🚨"),
    "Intelligence": ("🔍", "🕵️", "📡", "🧠", "🌐", "📊"),
    "Infrastructure": ("💻", "🖥️", "🗄️", "☁️", "🔌", "📱"),
    "Threats": ("🦠", "🐛", "💀", "☠️", "👾", "🎣"),
    "Knowledge": ("📚", "📖", "📝", "🧪", "🔬", "💡"),
}

DEFAULT_SYMBOL = "📌"


def symbol_pool() -> list[str]:
    """All selectable symbols, in menu order."""
    return [symbol for group in SYMBOL_GROUPS.values() for symbol in group]
