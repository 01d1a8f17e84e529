"""Requirement-completeness checks for spec documents."""

from __future__ import annotations

from specdoc.deltas.models import Delta
from specdoc.parser.models import ParsedDocument, Requirement, Section
from specdoc.validator.models import (
    IssueLocation,
    ValidationIssue,
    ValidationOptions,
    ValidationSeverity,
)

REQUIREMENTS = "Requirements"


def _location(section: Section, requirement: Requirement) -> IssueLocation:
    return IssueLocation(
        section=section.heading,
        requirement=requirement.name,
        start_line=requirement.start_line,
        end_line=requirement.end_line,
    )


def _each_requirement(doc: ParsedDocument) -> list[tuple[Section, Requirement]]:
    return [(s, r) for s in doc.sections for r in s.requirements]


def check_has_requirements(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """A present but empty Requirements section is an error.

    An absent section is already reported as missing.
    """
    section = doc.section(REQUIREMENTS)
    if section is None or section.requirements:
        return []
    return [
        ValidationIssue(
            severity=ValidationSeverity.error,
            code="no-requirements",
            message="Requirements section has no '### Requirement:' entries",
            location=IssueLocation(
                section=section.heading,
                start_line=section.start_line,
                end_line=section.end_line,
            ),
        )
    ]


def check_duplicate_requirements(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen: dict[str, int] = {}
    for section, requirement in _each_requirement(doc):
        key = requirement.name.strip().lower()
        if key in seen:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.error,
                    code="duplicate-requirement",
                    message=(
                        f"Requirement '{requirement.name}' is defined more than once "
                        f"(first at line {seen[key]})"
                    ),
                    location=_location(section, requirement),
                )
            )
        else:
            seen[key] = requirement.start_line
    return issues


def check_requirement_bodies(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            severity=ValidationSeverity.error,
            code="requirement-empty-body",
            message=f"Requirement '{requirement.name}' has no requirement text",
            location=_location(section, requirement),
        )
        for section, requirement in _each_requirement(doc)
        if not requirement.body
    ]


def check_requirement_scenarios(
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """Every requirement needs at least one scenario; strict mode makes this an error."""
    severity = ValidationSeverity.error if options.strict else ValidationSeverity.warning
    return [
        ValidationIssue(
            severity=severity,
            code="requirement-missing-scenario",
            message=f"Requirement '{requirement.name}' must have at least one scenario",
            location=_location(section, requirement),
        )
        for section, requirement in _each_requirement(doc)
        if not requirement.scenarios
    ]
