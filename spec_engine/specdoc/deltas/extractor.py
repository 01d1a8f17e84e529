"""Delta extraction from change proposals and delta spec files."""

from __future__ import annotations

import logging
import re

from specdoc.deltas.models import Delta, DeltaBullet, DeltaOperation
from specdoc.exceptions import MissingSectionError, UnsupportedDocumentKind
from specdoc.parser.builder import REQUIREMENTS_SECTION_RE
from specdoc.parser.models import DocumentKind, LineToken, ParsedDocument, Section, TokenType
from specdoc.parser.tokenizer import tokenize

logger = logging.getLogger(__name__)

WHAT_CHANGES = "What Changes"

# Spec ids are lowercase kebab tokens, so "**Note:**" or "**BREAKING**:" are prose.
_SPEC_ID = r"[a-z0-9][a-z0-9._\-/]*"
_QUOTED_ID = rf"[`*]*({_SPEC_ID})[`*]*"
_ARROW = r"\s*(?:->|→|=>)\s*"

# **auth:** text  |  **auth**: text
BOLD_PREFIX_RE = re.compile(r"^\*\*\s*([^*]+?)\s*(?::\*\*|\*\*\s*:)\s*(.*)$")
# auth: text  |  `auth`: text  |  old -> new: text
PLAIN_PREFIX_RE = re.compile(rf"^(`?{_SPEC_ID}`?(?:{_ARROW}`?{_SPEC_ID}`?)?)\s*:\s*(.*)$")
SPEC_ID_RE = re.compile(rf"^`?({_SPEC_ID})`?$")
ARROW_ID_RE = re.compile(rf"{_QUOTED_ID}{_ARROW}{_QUOTED_ID}")
FROM_RE = re.compile(rf"\b(?i:from)\s+{_QUOTED_ID}")
TO_RE = re.compile(rf"\b(?i:to|into)\s+{_QUOTED_ID}")

# Only the leading word of a description counts; an optional "[" may precede it.
OPERATION_KEYWORDS: list[tuple[DeltaOperation, re.Pattern[str]]] = [
    (DeltaOperation.renamed, re.compile(r"^\[?renam(?:e|es|ed|ing)\b", re.IGNORECASE)),
    (
        DeltaOperation.added,
        re.compile(r"^\[?(?:add(?:s|ed|ing)?|creat(?:e|es|ed|ing)|introduc(?:e|es|ed|ing))\b", re.IGNORECASE),
    ),
    (
        DeltaOperation.removed,
        re.compile(r"^\[?(?:remov(?:e|es|ed|ing)|delet(?:e|es|ed|ing)|drop(?:s|ped|ping)?)\b", re.IGNORECASE),
    ),
    (
        DeltaOperation.modified,
        re.compile(r"^\[?(?:modif(?:y|ies|ied|ying)|updat(?:e|es|ed|ing)|chang(?:e|es|ed|ing))\b", re.IGNORECASE),
    ),
]

FROM_TO_LINE_RE = re.compile(
    r"^(FROM|TO)\s*:\s*`?(?:#+\s*)?(?:Requirement:\s*)?(.+?)`?\s*$", re.IGNORECASE
)


def classify_operation(description: str) -> DeltaOperation:
    """Infer the delta operation from the leading word of a bullet's description.

    ``ADDED``/``MODIFIED``/``REMOVED``/``RENAMED`` markers and their verb
    forms ("Add", "Removes", "[renamed]") count. Operation words later in the
    text do not; a description that does not open with one is a modification.
    """
    text = description.strip()
    for operation, pattern in OPERATION_KEYWORDS:
        if pattern.match(text):
            return operation
    return DeltaOperation.modified


def _section_tokens(doc: ParsedDocument, section: Section) -> list[LineToken]:
    return [
        t for t in tokenize(doc.source)
        if section.start_line < t.line <= section.end_line
    ]


def _split_prefix(text: str) -> tuple[str, str] | None:
    """Split ``**spec:** description`` into (spec part, description)."""
    match = BOLD_PREFIX_RE.match(text) or PLAIN_PREFIX_RE.match(text)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def _parse_bullet(token: LineToken) -> DeltaBullet | None:
    split = _split_prefix(token.text)
    if split is None:
        return None
    spec_part, description = split

    renamed_from: str | None = None
    renamed_to: str | None = None
    arrow = ARROW_ID_RE.fullmatch(spec_part.strip())
    if arrow:
        spec_id = arrow.group(1)
        renamed_from, renamed_to = arrow.group(1), arrow.group(2)
        operation = DeltaOperation.renamed
    else:
        id_match = SPEC_ID_RE.match(spec_part)
        if not id_match:
            return None
        spec_id = id_match.group(1)
        operation = classify_operation(description)

    malformed: str | None = None
    if operation is DeltaOperation.renamed:
        if renamed_to is None:
            renamed_from, renamed_to = _rename_endpoints(spec_id, description)
        if renamed_from is None or renamed_to is None:
            malformed = "rename must name both a source and a destination spec"
        elif renamed_from == renamed_to:
            malformed = "rename source and destination are the same spec"
        else:
            spec_id = renamed_from
    elif not description:
        malformed = "bullet names a spec but has no description"

    return DeltaBullet(
        line=token.line,
        text=token.text,
        spec_id=spec_id,
        description=description,
        operation=operation,
        renamed_from=renamed_from,
        renamed_to=renamed_to,
        malformed_reason=malformed,
    )


def _rename_endpoints(spec_id: str, description: str) -> tuple[str | None, str | None]:
    arrow = ARROW_ID_RE.search(description)
    if arrow:
        return arrow.group(1), arrow.group(2)
    source = FROM_RE.search(description)
    dest = TO_RE.search(description)
    return (source.group(1) if source else spec_id), (dest.group(1) if dest else None)


def scan_change_bullets(doc: ParsedDocument) -> list[DeltaBullet]:
    """Return every top-level "What Changes" bullet that names a spec.

    Returns an empty list when the section is absent; callers that need to
    tell "absent" from "empty" should check the section themselves.
    """
    section = doc.section(WHAT_CHANGES)
    if section is None:
        return []

    items = [t for t in _section_tokens(doc, section) if t.type is TokenType.list_item]
    if not items:
        return []
    top_indent = min(t.indent for t in items)

    bullets: list[DeltaBullet] = []
    for token in items:
        if token.indent != top_indent:
            continue
        bullet = _parse_bullet(token)
        if bullet is not None:
            bullets.append(bullet)
    return bullets


def extract_deltas(doc: ParsedDocument) -> list[Delta]:
    """Extract one Delta per well-formed "What Changes" bullet, in source order.

    Raises UnsupportedDocumentKind for anything but a change proposal and
    MissingSectionError when the "What Changes" section is absent. Malformed
    bullets are skipped, never raised.
    """
    if doc.kind is not DocumentKind.change_proposal:
        raise UnsupportedDocumentKind("extract_deltas", doc.kind.value)
    if doc.section(WHAT_CHANGES) is None:
        raise MissingSectionError(WHAT_CHANGES)

    deltas: list[Delta] = []
    skipped = 0
    for bullet in scan_change_bullets(doc):
        if not bullet.well_formed:
            skipped += 1
            continue
        deltas.append(
            Delta(
                spec_id=bullet.spec_id,
                operation=bullet.operation,
                description=bullet.description,
                renamed_from=bullet.renamed_from,
                renamed_to=bullet.renamed_to,
                line=bullet.line,
            )
        )

    logger.debug("Extracted %d deltas (%d malformed bullets skipped)", len(deltas), skipped)
    return deltas


def extract_spec_deltas(spec_id: str, doc: ParsedDocument) -> list[Delta]:
    """Extract deltas from a change's delta spec (``## ADDED Requirements`` ...).

    ADDED, MODIFIED and REMOVED sections yield one delta per requirement.
    RENAMED sections yield one delta per ``FROM:``/``TO:`` pair; for those
    ``renamed_from``/``renamed_to`` hold requirement names.
    """
    if doc.kind is not DocumentKind.spec:
        raise UnsupportedDocumentKind("extract_spec_deltas", doc.kind.value)

    deltas: list[Delta] = []
    for section in doc.sections:
        match = REQUIREMENTS_SECTION_RE.match(section.heading.strip())
        if not match or match.group(1) is None:
            continue
        operation = DeltaOperation(match.group(1).upper())

        if operation is DeltaOperation.renamed:
            deltas.extend(_renamed_requirement_deltas(spec_id, doc, section))
            continue

        for requirement in section.requirements:
            deltas.append(
                Delta(
                    spec_id=spec_id,
                    operation=operation,
                    description=f"{operation.value.lower().capitalize()} requirement: {requirement.name}",
                    requirement=requirement.name,
                    line=requirement.start_line,
                )
            )
    return deltas


def _renamed_requirement_deltas(spec_id: str, doc: ParsedDocument, section: Section) -> list[Delta]:
    deltas: list[Delta] = []
    pending: tuple[str, int] | None = None
    for token in _section_tokens(doc, section):
        if token.type not in (TokenType.list_item, TokenType.text):
            continue
        match = FROM_TO_LINE_RE.match(token.text)
        if not match:
            continue
        name = match.group(2).strip()
        if match.group(1).upper() == "FROM":
            pending = (name, token.line)
        elif pending is not None:
            deltas.append(
                Delta(
                    spec_id=spec_id,
                    operation=DeltaOperation.renamed,
                    description=f"Rename requirement: {pending[0]} -> {name}",
                    renamed_from=pending[0],
                    renamed_to=name,
                    requirement=pending[0],
                    line=pending[1],
                )
            )
            pending = None
    return deltas
