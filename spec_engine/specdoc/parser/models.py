"""Data models for parsed spec and change documents."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DocumentKind(str, Enum):
    """Kind of markdown document being parsed."""

    spec = "spec"
    change_proposal = "change-proposal"


class TokenType(str, Enum):
    heading = "heading"
    list_item = "list_item"
    text = "text"
    blank = "blank"


class LineToken(BaseModel):
    """One classified source line."""

    type: TokenType
    line: int  # 1-based
    raw: str
    text: str = ""  # heading title or list item text, marker stripped
    depth: int = 0  # heading depth, 0 for non-headings
    indent: int = 0


class Scenario(BaseModel):
    """A scenario block; its step lines are kept verbatim."""

    description: str
    lines: list[str] = Field(default_factory=list)
    start_line: int
    end_line: int


class Requirement(BaseModel):
    """A ``### Requirement: <name>`` block within a requirements section."""

    name: str
    heading: str
    body: str = ""
    scenarios: list[Scenario] = Field(default_factory=list)
    start_line: int
    end_line: int


class Section(BaseModel):
    """A depth-2 section; owned by its ParsedDocument."""

    heading: str
    level: int = 2
    body: str = ""
    start_line: int
    end_line: int
    requirements: list[Requirement] = Field(default_factory=list)


class ParsedDocument(BaseModel):
    """Best-effort structural model of a spec or change proposal."""

    kind: DocumentKind
    title: str | None = None
    sections: list[Section] = Field(default_factory=list)
    source: str = ""

    def section(self, heading: str) -> Section | None:
        """Return the first section whose heading matches (case-insensitive)."""
        wanted = heading.strip().lower()
        for section in self.sections:
            if section.heading.strip().lower() == wanted:
                return section
        return None

    def has_section(self, heading: str) -> bool:
        return self.section(heading) is not None

    @property
    def requirements(self) -> list[Requirement]:
        """All requirements in source order, across requirement-bearing sections."""
        return [r for s in self.sections for r in s.requirements]

    @property
    def lines(self) -> list[str]:
        return self.source.splitlines()
