"""Front matter parsing and field rewriting for template fragments.

Fragments are markdown files that start with a YAML front matter block.
Parsing uses ruamel.yaml in round-trip mode so rewriting a field keeps
the rest of the block (key order, quoting, comments) intact.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from vaultnote.domain.types import CATEGORY_MARKERS

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations (ruamel.yaml's YAML object is stateful
    and a failed dump can leave it in a broken state).
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    y.width = 4096
    return y


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split *content* into ``(yaml_block, body)``.

    Returns ``(None, content)`` when there is no well-formed front matter.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, content

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])
    return None, content


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from markdown content.

    Returns:
        A ``(frontmatter, body)`` tuple. Without valid delimiters the
        result is ``({}, content)``.
    """
    yaml_block, body = split_frontmatter(content)
    if yaml_block is None:
        return {}, content
    fm: dict[str, Any] = _new_yaml().load(yaml_block) or {}
    return fm, body


def update_frontmatter(content: str, changes: dict[str, Any]) -> str:
    """Return *content* with top-level front matter keys replaced.

    String values are written double-quoted, matching the fragment
    conventions. Keys not named in *changes* are emitted untouched.

    Raises:
        ValueError: If *content* has no front matter block.
    """
    yaml_block, body = split_frontmatter(content)
    if yaml_block is None:
        msg = "Fragment has no front matter block"
        raise ValueError(msg)

    yaml = _new_yaml()
    fm = yaml.load(yaml_block) or {}
    for key, value in changes.items():
        fm[key] = _quoted(value)

    buf = StringIO()
    yaml.dump(fm, buf)
    return f"{_FRONTMATTER_DELIMITER}\n{buf.getvalue()}{_FRONTMATTER_DELIMITER}\n{body}"


def _quoted(value: Any) -> Any:
    if isinstance(value, str):
        return DoubleQuotedScalarString(value)
    if isinstance(value, list):
        return [_quoted(item) for item in value]
    return value


def primary_tag(frontmatter: dict[str, Any]) -> str | None:
    """Return the first tag that is not a category structural marker."""
    tags = frontmatter.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    for tag in tags:
        text = str(tag).strip()
        if text and text not in CATEGORY_MARKERS:
            return text
    return None
