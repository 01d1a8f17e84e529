"""Tests for the individual validation checks."""

from __future__ import annotations

from specdoc.deltas import extract_deltas
from specdoc.parser import DocumentKind, parse
from specdoc.validator.delta_checks import (
    check_bullet_descriptions,
    check_delta_count,
    check_duplicate_deltas,
    check_has_deltas,
    check_rename_endpoints,
)
from specdoc.validator.models import ValidationOptions, ValidationSeverity
from specdoc.validator.requirements import (
    check_duplicate_requirements,
    check_has_requirements,
    check_requirement_bodies,
    check_requirement_scenarios,
)
from specdoc.validator.sections import check_required_sections
from specdoc.validator.why import check_why_too_long, check_why_too_short

LONG_WHY = "This is a sufficiently long explanation to pass the why length requirement."
DEFAULT = ValidationOptions()
STRICT = ValidationOptions(strict=True)


def _change(why: str = LONG_WHY, what: str = "- **auth:** Add login"):
    return parse(f"## Why\n{why}\n\n## What Changes\n{what}\n", DocumentKind.change_proposal)


def _spec(requirements: str):
    return parse(f"## Purpose\nAuth.\n\n## Requirements\n{requirements}", DocumentKind.spec)


class TestRequiredSections:
    def test_spec_missing_both(self) -> None:
        doc = parse("# Empty spec\n", DocumentKind.spec)
        issues = check_required_sections(doc, None, DEFAULT)
        assert [i.code for i in issues] == ["missing-section", "missing-section"]
        assert "Purpose" in issues[0].message
        assert "Requirements" in issues[1].message
        assert all(i.severity is ValidationSeverity.error for i in issues)

    def test_change_missing_what_changes(self) -> None:
        doc = parse("## Why\nreason\n", DocumentKind.change_proposal)
        (issue,) = check_required_sections(doc, [], DEFAULT)
        assert "What Changes" in issue.message

    def test_complete_spec(self, valid_spec_text: str) -> None:
        assert check_required_sections(parse(valid_spec_text, DocumentKind.spec), None, DEFAULT) == []


class TestWhy:
    def test_too_short_is_warning(self) -> None:
        (issue,) = check_why_too_short(_change(why="too short"), [], DEFAULT)
        assert issue.code == "why-too-short"
        assert issue.severity is ValidationSeverity.warning
        assert issue.location is not None
        assert issue.location.section == "Why"
        assert issue.location.start_line == 1

    def test_too_short_is_error_when_strict(self) -> None:
        (issue,) = check_why_too_short(_change(why="too short"), [], STRICT)
        assert issue.severity is ValidationSeverity.error

    def test_long_enough(self) -> None:
        assert check_why_too_short(_change(), [], DEFAULT) == []

    def test_missing_why_not_reported_twice(self) -> None:
        doc = parse("## What Changes\n- **a:** add", DocumentKind.change_proposal)
        assert check_why_too_short(doc, [], DEFAULT) == []

    def test_threshold_is_configurable(self) -> None:
        options = ValidationOptions(min_why_length=5)
        assert check_why_too_short(_change(why="too short"), [], options) == []

    def test_too_long(self) -> None:
        (issue,) = check_why_too_long(_change(why="word " * 300), [], DEFAULT)
        assert issue.code == "why-too-long"
        assert issue.severity is ValidationSeverity.warning


class TestRequirements:
    def test_empty_requirements_section(self) -> None:
        (issue,) = check_has_requirements(_spec("Nothing here yet.\n"), None, DEFAULT)
        assert issue.code == "no-requirements"

    def test_absent_requirements_section_not_reported_here(self) -> None:
        doc = parse("## Purpose\nx\n", DocumentKind.spec)
        assert check_has_requirements(doc, None, DEFAULT) == []

    def test_duplicates(self) -> None:
        doc = _spec("### Requirement: A\nx\n### Requirement: a\ny\n")
        (issue,) = check_duplicate_requirements(doc, None, DEFAULT)
        assert issue.code == "duplicate-requirement"
        assert issue.location is not None
        assert issue.location.start_line == 7

    def test_empty_body(self) -> None:
        doc = _spec("### Requirement: A\n#### Scenario: S\n- WHEN x\n")
        (issue,) = check_requirement_bodies(doc, None, DEFAULT)
        assert issue.code == "requirement-empty-body"
        assert issue.severity is ValidationSeverity.error
        assert issue.location is not None
        assert issue.location.requirement == "A"

    def test_missing_scenario_warning_then_error(self) -> None:
        doc = _spec("### Requirement: X\nText")
        (warning,) = check_requirement_scenarios(doc, None, DEFAULT)
        (error,) = check_requirement_scenarios(doc, None, STRICT)
        assert warning.code == error.code == "requirement-missing-scenario"
        assert warning.severity is ValidationSeverity.warning
        assert error.severity is ValidationSeverity.error

    def test_complete_requirements(self, valid_spec_text: str) -> None:
        doc = parse(valid_spec_text, DocumentKind.spec)
        assert check_requirement_bodies(doc, None, DEFAULT) == []
        assert check_requirement_scenarios(doc, None, STRICT) == []


class TestDeltaChecks:
    def test_no_deltas(self) -> None:
        doc = _change(what="There are changes proposed, but no delta specs provided yet.")
        (issue,) = check_has_deltas(doc, [], DEFAULT)
        assert issue.code == "no-deltas"
        assert issue.severity is ValidationSeverity.error
        assert issue.location is not None
        assert issue.location.section == "What Changes"

    def test_deltas_present(self) -> None:
        doc = _change()
        assert check_has_deltas(doc, extract_deltas(doc), DEFAULT) == []

    def test_malformed_bullets_suppress_no_deltas(self) -> None:
        doc = _change(what="- user-auth: renamed")
        assert check_has_deltas(doc, extract_deltas(doc), DEFAULT) == []

    def test_rename_missing_endpoint(self) -> None:
        doc = _change(what="- **billing:** Add refunds\n- user-auth: renamed")
        (issue,) = check_rename_endpoints(doc, extract_deltas(doc), DEFAULT)
        assert issue.code == "rename-missing-endpoint"
        assert "user-auth: renamed" in issue.message
        assert issue.location is not None
        assert issue.location.start_line == 6

    def test_bullet_without_description(self) -> None:
        doc = _change(what="- **auth:**")
        (issue,) = check_bullet_descriptions(doc, [], DEFAULT)
        assert issue.code == "delta-missing-description"
        assert check_rename_endpoints(doc, [], DEFAULT) == []

    def test_too_many_deltas(self) -> None:
        what = "\n".join(f"- **spec-{i}:** Add thing" for i in range(4))
        doc = _change(what=what)
        (issue,) = check_delta_count(doc, extract_deltas(doc), ValidationOptions(max_deltas=3))
        assert issue.code == "too-many-deltas"
        assert issue.severity is ValidationSeverity.warning

    def test_duplicate_deltas(self) -> None:
        doc = _change(what="- **auth:** Add login\n- **auth:** Add logout\n- **auth:** Remove sso")
        (issue,) = check_duplicate_deltas(doc, extract_deltas(doc), DEFAULT)
        assert issue.code == "duplicate-delta"
        assert issue.location is not None
        assert issue.location.start_line == 6
