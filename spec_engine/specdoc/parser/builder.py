"""Tree-building pass: fold the token stream into sections, requirements, scenarios."""

from __future__ import annotations

import logging
import re
from typing import Any

from specdoc.parser.models import (
    DocumentKind,
    LineToken,
    ParsedDocument,
    Requirement,
    Scenario,
    Section,
    TokenType,
)
from specdoc.parser.tokenizer import tokenize

logger = logging.getLogger(__name__)

SECTION_DEPTH = 2
REQUIREMENT_DEPTH = 3
SCENARIO_DEPTH = 4

REQUIREMENTS_SECTION_RE = re.compile(
    r"^(?:(ADDED|MODIFIED|REMOVED|RENAMED)\s+)?Requirements$", re.IGNORECASE
)
REQUIREMENT_HEADING_RE = re.compile(r"^Requirement:\s*(\S.*)$", re.IGNORECASE)
SCENARIO_HEADING_RE = re.compile(r"^Scenario:\s*(.*)$", re.IGNORECASE)
# **Scenario: name** trailing  |  **Scenario**: name
BOLD_SCENARIO_RE = re.compile(
    r"^\*\*Scenario:\s*(.*?)\*\*\s*(.*)$|^\*\*Scenario\*\*:\s*(.*)$", re.IGNORECASE
)


def is_requirements_heading(heading: str) -> bool:
    return REQUIREMENTS_SECTION_RE.match(heading.strip()) is not None


def parse(text: str, kind: DocumentKind | str) -> ParsedDocument:
    """Parse markdown *text* into a ParsedDocument.

    Never raises on malformed input: missing or broken structure is left
    for the validation rules to report.
    """
    kind = DocumentKind(kind)
    tokens = tokenize(text)
    doc = build(tokens, kind, text)
    logger.debug(
        "Parsed %s document: %d sections, %d requirements",
        kind.value,
        len(doc.sections),
        len(doc.requirements),
    )
    return doc


def build(tokens: list[LineToken], kind: DocumentKind, source: str = "") -> ParsedDocument:
    """Fold classified tokens into a ParsedDocument."""
    builder = _TreeBuilder()
    for token in tokens:
        builder.feed(token)
    builder.finish()
    return ParsedDocument(kind=kind, title=builder.title, sections=builder.sections, source=source)


def _bold_scenario(text: str) -> str | None:
    match = BOLD_SCENARIO_RE.match(text)
    if not match:
        return None
    if match.group(3) is not None:
        return match.group(3).strip()
    return (match.group(1) or match.group(2) or "").strip()


class _TreeBuilder:
    """Mutable fold state; each open block is a dict until it closes."""

    def __init__(self) -> None:
        self.title: str | None = None
        self.sections: list[Section] = []
        self._section: dict[str, Any] | None = None
        self._requirement: dict[str, Any] | None = None
        self._scenario: dict[str, Any] | None = None

    # -- token dispatch -------------------------------------------------

    def feed(self, token: LineToken) -> None:
        if token.type is TokenType.heading:
            self._on_heading(token)
        else:
            self._on_line(token)

    def finish(self) -> None:
        self._close_scenario()
        self._close_requirement()
        self._close_section()

    def _on_heading(self, token: LineToken) -> None:
        depth = token.depth
        if depth <= SCENARIO_DEPTH:
            self._close_scenario()
        if depth <= REQUIREMENT_DEPTH:
            self._close_requirement()
        if depth <= SECTION_DEPTH:
            self._close_section()

        if depth == 1:
            if self.title is None:
                self.title = token.text
            return
        if depth == SECTION_DEPTH:
            self._section = {
                "heading": token.text,
                "level": depth,
                "start_line": token.line,
                "last_line": token.line,
                "body": [],
                "requirements": [],
                "bears_requirements": is_requirements_heading(token.text),
            }
            return

        if self._section is None:
            return
        self._append_section_line(token)

        if depth == REQUIREMENT_DEPTH and self._section["bears_requirements"]:
            match = REQUIREMENT_HEADING_RE.match(token.text)
            if match:
                self._requirement = {
                    "name": match.group(1).strip(),
                    "heading": token.text,
                    "start_line": token.line,
                    "last_line": token.line,
                    "body": [],
                    "scenarios": [],
                }
                return

        if depth == SCENARIO_DEPTH and self._requirement is not None:
            match = SCENARIO_HEADING_RE.match(token.text)
            if match:
                self._open_scenario(match.group(1).strip(), token.line)
                return

        self._append_block_line(token)

    def _on_line(self, token: LineToken) -> None:
        if self._section is None:
            return
        self._append_section_line(token)

        if self._requirement is not None and token.type is not TokenType.blank:
            description = _bold_scenario(token.text)
            if description is not None:
                self._close_scenario()
                self._open_scenario(description, token.line)
                return
            if token.type is TokenType.list_item and self._opens_list_scenario(token):
                self._close_scenario()
                self._open_scenario(token.text, token.line, list_indent=token.indent)
                return

        self._append_block_line(token)

    # -- block helpers ---------------------------------------------------

    def _append_section_line(self, token: LineToken) -> None:
        assert self._section is not None
        self._section["body"].append(token.raw)
        if token.type is not TokenType.blank:
            self._section["last_line"] = token.line

    def _append_block_line(self, token: LineToken) -> None:
        if token.type is TokenType.blank:
            return
        if self._scenario is not None:
            self._scenario["lines"].append(token.raw.rstrip())
            self._scenario["last_line"] = token.line
        if self._requirement is not None:
            if self._scenario is None:
                self._requirement["body"].append(token.raw.strip())
            self._requirement["last_line"] = token.line

    def _opens_list_scenario(self, token: LineToken) -> bool:
        """A list item opens a scenario unless it is a step of the open one.

        Items under a heading or bold-marker scenario are its steps; under a
        list-item scenario only deeper items are.
        """
        if self._scenario is None:
            return True
        indent = self._scenario["list_indent"]
        return indent is not None and token.indent <= indent

    def _open_scenario(self, description: str, line: int, list_indent: int | None = None) -> None:
        assert self._requirement is not None
        self._scenario = {
            "description": description,
            "lines": [],
            "start_line": line,
            "last_line": line,
            "list_indent": list_indent,
        }
        self._requirement["last_line"] = line

    def _close_scenario(self) -> None:
        if self._scenario is None or self._requirement is None:
            self._scenario = None
            return
        s = self._scenario
        self._requirement["scenarios"].append(
            Scenario(
                description=s["description"],
                lines=s["lines"],
                start_line=s["start_line"],
                end_line=s["last_line"],
            )
        )
        self._scenario = None

    def _close_requirement(self) -> None:
        if self._requirement is None or self._section is None:
            self._requirement = None
            return
        r = self._requirement
        self._section["requirements"].append(
            Requirement(
                name=r["name"],
                heading=r["heading"],
                body="\n".join(r["body"]).strip(),
                scenarios=r["scenarios"],
                start_line=r["start_line"],
                end_line=r["last_line"],
            )
        )
        self._requirement = None

    def _close_section(self) -> None:
        if self._section is None:
            return
        s = self._section
        self.sections.append(
            Section(
                heading=s["heading"],
                level=s["level"],
                body="\n".join(s["body"]).strip(),
                start_line=s["start_line"],
                end_line=s["last_line"],
                requirements=s["requirements"],
            )
        )
        self._section = None
