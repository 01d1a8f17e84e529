"""Markdown parser for spec and change-proposal documents."""

from specdoc.parser.builder import build, parse
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

__all__ = [
    "DocumentKind",
    "LineToken",
    "ParsedDocument",
    "Requirement",
    "Scenario",
    "Section",
    "TokenType",
    "build",
    "parse",
    "tokenize",
]
