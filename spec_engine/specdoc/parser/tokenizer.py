"""Line classification pass: raw markdown to a flat token stream."""

from __future__ import annotations

import re

from specdoc.parser.models import LineToken, TokenType

HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
LIST_ITEM_RE = re.compile(r"^([ \t]*)(?:[-*+]|\d+[.)])[ \t]+(.*)$")
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


def tokenize(text: str) -> list[LineToken]:
    """Classify every line of *text*.

    Lines inside fenced code blocks are always plain text so that a
    ``## heading`` in an example never opens a section.
    """
    tokens: list[LineToken] = []
    fence: str | None = None

    for line_no, raw in enumerate(text.splitlines(), start=1):
        fence_match = FENCE_RE.match(raw)
        if fence is not None:
            if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                fence = None
            tokens.append(LineToken(type=TokenType.text, line=line_no, raw=raw, text=raw.strip()))
            continue
        if fence_match:
            fence = fence_match.group(1)
            tokens.append(LineToken(type=TokenType.text, line=line_no, raw=raw, text=raw.strip()))
            continue

        tokens.append(classify_line(raw, line_no))

    return tokens


def classify_line(raw: str, line_no: int) -> LineToken:
    """Classify a single line outside of a code fence."""
    if not raw.strip():
        return LineToken(type=TokenType.blank, line=line_no, raw=raw)

    heading = HEADING_RE.match(raw)
    if heading:
        return LineToken(
            type=TokenType.heading,
            line=line_no,
            raw=raw,
            text=(heading.group(2) or "").strip(),
            depth=len(heading.group(1)),
        )

    item = LIST_ITEM_RE.match(raw)
    if item:
        indent = len(item.group(1).expandtabs(4))
        return LineToken(
            type=TokenType.list_item,
            line=line_no,
            raw=raw,
            text=item.group(2).strip(),
            indent=indent,
        )

    return LineToken(type=TokenType.text, line=line_no, raw=raw, text=raw.strip())
