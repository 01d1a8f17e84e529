"""Delta-consistency checks for change proposals."""

from __future__ import annotations

from specdoc.deltas.extractor import WHAT_CHANGES, scan_change_bullets
from specdoc.deltas.models import Delta, DeltaBullet, DeltaOperation
from specdoc.parser.models import ParsedDocument
from specdoc.validator.models import (
    IssueLocation,
    ValidationIssue,
    ValidationOptions,
    ValidationSeverity,
)


def _bullet_location(bullet: DeltaBullet) -> IssueLocation:
    return IssueLocation(section=WHAT_CHANGES, start_line=bullet.line, end_line=bullet.line)


def check_has_deltas(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """A change must modify at least one spec.

    Skipped when "What Changes" is absent (reported as a missing section) and
    when bullets were recognised but all were malformed (each is reported
    on its own).
    """
    section = doc.section(WHAT_CHANGES)
    if section is None or deltas:
        return []
    if scan_change_bullets(doc):
        return []
    return [
        ValidationIssue(
            severity=ValidationSeverity.error,
            code="no-deltas",
            message="Change must have at least one delta; no spec changes were found",
            location=IssueLocation(
                section=section.heading,
                start_line=section.start_line,
                end_line=section.end_line,
            ),
        )
    ]


def check_rename_endpoints(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            severity=ValidationSeverity.error,
            code="rename-missing-endpoint",
            message=f"Malformed rename bullet '{bullet.text}': {bullet.malformed_reason}",
            location=_bullet_location(bullet),
        )
        for bullet in scan_change_bullets(doc)
        if not bullet.well_formed and bullet.operation is DeltaOperation.renamed
    ]


def check_bullet_descriptions(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            severity=ValidationSeverity.error,
            code="delta-missing-description",
            message=f"Delta bullet for '{bullet.spec_id}' has no description",
            location=_bullet_location(bullet),
        )
        for bullet in scan_change_bullets(doc)
        if not bullet.well_formed and bullet.operation is not DeltaOperation.renamed
    ]


def check_delta_count(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    if not deltas or len(deltas) <= options.max_deltas:
        return []
    return [
        ValidationIssue(
            severity=ValidationSeverity.warning,
            code="too-many-deltas",
            message=(
                f"Change has {len(deltas)} deltas; consider splitting it into "
                f"changes of at most {options.max_deltas}"
            ),
        )
    ]


def check_duplicate_deltas(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen: set[tuple[str, DeltaOperation, str | None]] = set()
    for delta in deltas or []:
        key = (delta.spec_id, delta.operation, delta.requirement)
        if key in seen:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.warning,
                    code="duplicate-delta",
                    message=(
                        f"Spec '{delta.spec_id}' is listed more than once as "
                        f"{delta.operation.value}"
                    ),
                    location=(
                        IssueLocation(section=WHAT_CHANGES, start_line=delta.line, end_line=delta.line)
                        if delta.line is not None and delta.requirement is None
                        else None
                    ),
                )
            )
        seen.add(key)
    return issues
