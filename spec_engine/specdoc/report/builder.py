"""Report aggregation and the JSON rendering."""

from __future__ import annotations

from typing import Any

from specdoc.report.models import ReportSummary, ValidationReport
from specdoc.validator.models import ValidationIssue, ValidationSeverity


def build(issues: list[ValidationIssue], strict: bool = False) -> ValidationReport:
    """Aggregate *issues* into a report.

    ``valid`` means no errors, or in strict mode no issues at all.
    """
    errors = sum(1 for i in issues if i.severity is ValidationSeverity.error)
    warnings = sum(1 for i in issues if i.severity is ValidationSeverity.warning)
    valid = not issues if strict else errors == 0
    return ValidationReport(
        valid=valid,
        strict=strict,
        issues=tuple(issues),
        summary=ReportSummary(errors=errors, warnings=warnings, total=len(issues)),
    )


def issue_to_json(issue: ValidationIssue) -> dict[str, Any]:
    return {
        "severity": issue.severity.value,
        "code": issue.code,
        "message": issue.message,
        "location": issue.location.model_dump() if issue.location is not None else None,
    }


def to_json(report: ValidationReport) -> dict[str, Any]:
    """Canonical machine-readable form. Keys are only ever added, never dropped."""
    return {
        "valid": report.valid,
        "strict": report.strict,
        "issues": [issue_to_json(i) for i in report.issues],
        "summary": report.summary.model_dump(),
    }
