"""Tests for the line classification pass."""

from __future__ import annotations

from specdoc.parser.models import TokenType
from specdoc.parser.tokenizer import classify_line, tokenize


class TestClassifyLine:
    def test_heading_depth_and_text(self) -> None:
        token = classify_line("### Requirement: Login", 7)
        assert token.type is TokenType.heading
        assert token.depth == 3
        assert token.text == "Requirement: Login"
        assert token.line == 7

    def test_heading_closing_hashes_stripped(self) -> None:
        token = classify_line("## Why ##", 1)
        assert token.type is TokenType.heading
        assert token.text == "Why"

    def test_hash_without_space_is_text(self) -> None:
        assert classify_line("#hashtag", 1).type is TokenType.text

    def test_seven_hashes_is_text(self) -> None:
        assert classify_line("####### too deep", 1).type is TokenType.text

    def test_list_item_marker_stripped(self) -> None:
        token = classify_line("- **auth:** Add login", 2)
        assert token.type is TokenType.list_item
        assert token.text == "**auth:** Add login"
        assert token.indent == 0

    def test_nested_list_item_indent(self) -> None:
        token = classify_line("    * detail", 3)
        assert token.type is TokenType.list_item
        assert token.indent == 4

    def test_numbered_list_item(self) -> None:
        token = classify_line("1. first", 1)
        assert token.type is TokenType.list_item
        assert token.text == "first"

    def test_blank(self) -> None:
        assert classify_line("   ", 1).type is TokenType.blank

    def test_plain_text(self) -> None:
        token = classify_line("  Just some prose.", 1)
        assert token.type is TokenType.text
        assert token.text == "Just some prose."


class TestTokenize:
    def test_line_numbers_are_one_based(self) -> None:
        tokens = tokenize("# Title\n\n## Why\nBecause.")
        assert [t.line for t in tokens] == [1, 2, 3, 4]
        assert [t.type for t in tokens] == [
            TokenType.heading,
            TokenType.blank,
            TokenType.heading,
            TokenType.text,
        ]

    def test_fenced_headings_are_text(self) -> None:
        text = "## Example\n```markdown\n## Not a section\n- not a bullet\n```\n## After"
        tokens = tokenize(text)
        assert [t.type for t in tokens] == [
            TokenType.heading,
            TokenType.text,
            TokenType.text,
            TokenType.text,
            TokenType.text,
            TokenType.heading,
        ]

    def test_tilde_fence_not_closed_by_backticks(self) -> None:
        tokens = tokenize("~~~\n```\n## inside\n~~~\n## outside")
        assert tokens[2].type is TokenType.text
        assert tokens[4].type is TokenType.heading

    def test_empty_text(self) -> None:
        assert tokenize("") == []
