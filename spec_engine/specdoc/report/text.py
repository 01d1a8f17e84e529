"""Human-readable report rendering with remediation guidance."""

from __future__ import annotations

from specdoc.parser.models import DocumentKind
from specdoc.report.models import ValidationReport
from specdoc.validator.models import ValidationIssue, ValidationSeverity

DEFAULT_TOOL = "openspec"

_SUBJECT_LABEL = {
    DocumentKind.spec: "Specification",
    DocumentKind.change_proposal: "Change",
}

_SEVERITY_PREFIX = {
    ValidationSeverity.error: "✗ [ERROR]",
    ValidationSeverity.warning: "⚠ [WARNING]",
}

# Hints are emitted in issue order, each at most once.
_CHANGE_GUIDANCE: dict[str, str] = {
    "missing-section": "Ensure proposal.md has '## Why' and '## What Changes' sections",
    "why-too-short": "Expand '## Why' into a few sentences explaining the problem and motivation",
    "why-too-long": "Trim '## Why' to the essential motivation; move detail to design.md",
    "no-deltas": (
        "Ensure the change has deltas: list them under '## What Changes' as "
        "'- **<spec-id>:** <description>' bullets, or add delta specs in specs/ "
        "using '## ADDED|MODIFIED|REMOVED|RENAMED Requirements' headers"
    ),
    "rename-missing-endpoint": (
        "Name both specs in a rename bullet, e.g. '- **<old-id>:** Renamed to <new-id>'"
    ),
    "delta-missing-description": "Describe what changes for every spec listed in '## What Changes'",
    "too-many-deltas": "Consider splitting the change into smaller, focused changes",
    "duplicate-delta": "List each spec once per operation in '## What Changes'",
    "rule-failed": "A validation rule crashed; re-run with --verbose and report the traceback",
}

_SPEC_GUIDANCE: dict[str, str] = {
    "missing-section": "Ensure spec.md has '## Purpose' and '## Requirements' sections",
    "no-requirements": "Add at least one '### Requirement: <name>' under '## Requirements'",
    "duplicate-requirement": "Give every requirement a unique name",
    "requirement-empty-body": "Add the requirement text directly under each '### Requirement:' heading",
    "requirement-missing-scenario": "Each requirement MUST include at least one '#### Scenario:' block",
    "rule-failed": "A validation rule crashed; re-run with --verbose and report the traceback",
}


def format_issue(issue: ValidationIssue) -> str:
    prefix = _SEVERITY_PREFIX[issue.severity]
    where = issue.location.describe() if issue.location is not None else ""
    if where:
        return f"{prefix} {where}: {issue.message}"
    return f"{prefix} {issue.message}"


def next_steps(
    report: ValidationReport,
    subject_id: str,
    kind: DocumentKind,
    tool: str = DEFAULT_TOOL,
) -> list[str]:
    """Remediation hints for the codes present in *report*, plus an inspect command."""
    table = _CHANGE_GUIDANCE if kind is DocumentKind.change_proposal else _SPEC_GUIDANCE
    steps: list[str] = []
    for issue in report.issues:
        hint = table.get(issue.code)
        if hint and hint not in steps:
            steps.append(hint)

    if kind is DocumentKind.change_proposal:
        steps.append(f"Debug parsed deltas: {tool} change show {subject_id} --json --deltas-only")
    else:
        steps.append(f"Inspect the parsed spec: {tool} spec show {subject_id} --json")
    return steps


def to_text(
    report: ValidationReport,
    subject_id: str,
    kind: DocumentKind | str = DocumentKind.change_proposal,
    tool: str = DEFAULT_TOOL,
) -> str:
    """Render *report* for a terminal.

    The "Next steps:" footer appears only for invalid reports, once, after
    every issue line.
    """
    kind = DocumentKind(kind)
    label = _SUBJECT_LABEL[kind]
    if report.valid:
        lines = [f"{label} '{subject_id}' is valid"]
    else:
        lines = [f"{label} '{subject_id}' has issues"]

    lines.extend(format_issue(i) for i in report.issues)

    if not report.valid:
        lines.append("Next steps:")
        lines.extend(f"  - {step}" for step in next_steps(report, subject_id, kind, tool))
    return "\n".join(lines)
