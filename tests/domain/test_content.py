"""Tests for front matter parsing and rewriting."""

from __future__ import annotations

import pytest

from vaultnote.domain.content import (
    parse_frontmatter,
    primary_tag,
    split_frontmatter,
    update_frontmatter,
)
from vaultnote.domain.types import MID_LEVEL_MARKER, TOP_LEVEL_MARKER

BASIC_METADATA = """\
---
content_type: "Basic"
tags:
  - "📝Basic"
primary_categories: []
secondary_categories: []
status: "draft"
---
"""


class TestSplitFrontmatter:
    def test_splits_block_and_body(self) -> None:
        block, body = split_frontmatter("---\na: 1\n---\n# Title\n")
        assert block == "a: 1"
        assert body == "# Title\n"

    def test_no_opening_delimiter(self) -> None:
        assert split_frontmatter("# Title\n") == (None, "# Title\n")

    def test_unterminated_block(self) -> None:
        assert split_frontmatter("---\na: 1\n") == (None, "---\na: 1\n")

    def test_crlf_line_endings(self) -> None:
        block, _body = split_frontmatter("---\r\na: 1\r\n---\r\nbody")
        assert block == "a: 1"


class TestParseFrontmatter:
    def test_parses_fields(self) -> None:
        fm, body = parse_frontmatter(BASIC_METADATA)
        assert fm["content_type"] == "Basic"
        assert list(fm["tags"]) == ["📝Basic"]
        assert body == ""

    def test_without_frontmatter(self) -> None:
        assert parse_frontmatter("plain text") == ({}, "plain text")

    def test_empty_block(self) -> None:
        fm, _body = parse_frontmatter("---\n---\nbody")
        assert fm == {}


class TestUpdateFrontmatter:
    def test_replaces_named_keys_only(self) -> None:
        updated = update_frontmatter(
            BASIC_METADATA,
            {"content_type": "Malware Sample", "tags": ["🦠Malware_Sample"]},
        )
        fm, _body = parse_frontmatter(updated)
        assert fm["content_type"] == "Malware Sample"
        assert list(fm["tags"]) == ["🦠Malware_Sample"]
        assert fm["status"] == "draft"
        assert "primary_categories: []" in updated
        assert "secondary_categories: []" in updated
        assert 'content_type: "Malware Sample"' in updated

    def test_keeps_body(self) -> None:
        updated = update_frontmatter("---\na: 1\n---\n# Body\n", {"a": "two"})
        assert updated.endswith("---\n# Body\n")

    def test_preserves_key_order(self) -> None:
        updated = update_frontmatter(BASIC_METADATA, {"status": "final"})
        fm, _body = parse_frontmatter(updated)
        assert list(fm) == [
            "content_type",
            "tags",
            "primary_categories",
            "secondary_categories",
            "status",
        ]

    def test_requires_frontmatter(self) -> None:
        with pytest.raises(ValueError, match="no front matter"):
            update_frontmatter("# Just a body\n", {"a": "b"})


class TestPrimaryTag:
    def test_skips_category_markers(self) -> None:
        fm = {"tags": [TOP_LEVEL_MARKER, MID_LEVEL_MARKER, "🦠Malware_Sample"]}
        assert primary_tag(fm) == "🦠Malware_Sample"

    def test_skips_blank_tags(self) -> None:
        assert primary_tag({"tags": ["", "  ", "📝Basic"]}) == "📝Basic"

    def test_single_string_tag(self) -> None:
        assert primary_tag({"tags": "📝Basic"}) == "📝Basic"

    @pytest.mark.parametrize("fm", [{}, {"tags": None}, {"tags": [TOP_LEVEL_MARKER]}])
    def test_no_usable_tag(self, fm: dict[str, object]) -> None:
        assert primary_tag(fm) is None
