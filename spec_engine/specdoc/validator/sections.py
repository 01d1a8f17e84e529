"""Structural-presence checks: required top-level sections."""

from __future__ import annotations

from specdoc.deltas.models import Delta
from specdoc.parser.models import DocumentKind, ParsedDocument
from specdoc.validator.models import ValidationIssue, ValidationOptions, ValidationSeverity

REQUIRED_SECTIONS: dict[DocumentKind, list[str]] = {
    DocumentKind.spec: ["Purpose", "Requirements"],
    DocumentKind.change_proposal: ["Why", "What Changes"],
}

_SUBJECT = {
    DocumentKind.spec: "Spec",
    DocumentKind.change_proposal: "Change",
}


def check_required_sections(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """Flag every required ``##`` section the document lacks."""
    issues: list[ValidationIssue] = []
    for heading in REQUIRED_SECTIONS[doc.kind]:
        if doc.has_section(heading):
            continue
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.error,
                code="missing-section",
                message=f"{_SUBJECT[doc.kind]} must have a '## {heading}' section",
            )
        )
    return issues
