"""Content-sufficiency checks for a change proposal's "Why" section."""

from __future__ import annotations

from specdoc.deltas.models import Delta
from specdoc.parser.models import ParsedDocument
from specdoc.validator.models import (
    IssueLocation,
    ValidationIssue,
    ValidationOptions,
    ValidationSeverity,
)

WHY = "Why"


def _why_text(doc: ParsedDocument) -> tuple[str, IssueLocation] | None:
    section = doc.section(WHY)
    if section is None:
        return None
    text = " ".join(section.body.split())
    location = IssueLocation(
        section=section.heading,
        start_line=section.start_line,
        end_line=section.end_line,
    )
    return text, location


def check_why_too_short(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """A one-line justification is not enough; strict mode makes this an error."""
    found = _why_text(doc)
    if found is None:
        return []
    text, location = found
    if len(text) >= options.min_why_length:
        return []
    return [
        ValidationIssue(
            severity=ValidationSeverity.error if options.strict else ValidationSeverity.warning,
            code="why-too-short",
            message=(
                f"Why section is too short ({len(text)} characters); "
                f"explain the motivation in at least {options.min_why_length} characters"
            ),
            location=location,
        )
    ]


def check_why_too_long(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    found = _why_text(doc)
    if found is None:
        return []
    text, location = found
    if len(text) <= options.max_why_length:
        return []
    return [
        ValidationIssue(
            severity=ValidationSeverity.warning,
            code="why-too-long",
            message=(
                f"Why section is long ({len(text)} characters); "
                f"keep it under {options.max_why_length} characters"
            ),
            location=location,
        )
    ]
