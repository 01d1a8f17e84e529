"""Tests for report aggregation and JSON rendering."""

from __future__ import annotations

import json

from specdoc.report import build, to_json
from specdoc.validator.models import IssueLocation, ValidationIssue, ValidationSeverity


def _issue(severity: ValidationSeverity, code: str = "x", location: IssueLocation | None = None) -> ValidationIssue:
    return ValidationIssue(severity=severity, code=code, message=f"{code} message", location=location)


ERROR = ValidationSeverity.error
WARNING = ValidationSeverity.warning


class TestBuild:
    def test_no_issues_is_valid(self) -> None:
        report = build([])
        assert report.valid is True
        assert report.summary.total == 0

    def test_warnings_only_valid_unless_strict(self) -> None:
        issues = [_issue(WARNING)]
        assert build(issues, strict=False).valid is True
        assert build(issues, strict=True).valid is False

    def test_error_is_invalid(self) -> None:
        assert build([_issue(ERROR)]).valid is False

    def test_summary_counts(self) -> None:
        report = build([_issue(ERROR), _issue(WARNING), _issue(WARNING)])
        assert (report.summary.errors, report.summary.warnings, report.summary.total) == (1, 2, 3)

    def test_issue_order_preserved(self) -> None:
        issues = [_issue(WARNING, "b"), _issue(ERROR, "a")]
        assert [i.code for i in build(issues).issues] == ["b", "a"]

    def test_report_is_not_affected_by_later_list_changes(self) -> None:
        issues = [_issue(ERROR)]
        report = build(issues)
        issues.append(_issue(WARNING))
        assert report.summary.total == 1
        assert len(report.issues) == 1


class TestToJson:
    def test_stable_keys(self) -> None:
        data = to_json(build([_issue(ERROR, "missing-section")]))
        assert set(data) == {"valid", "strict", "issues", "summary"}
        assert data["issues"] == [
            {
                "severity": "error",
                "code": "missing-section",
                "message": "missing-section message",
                "location": None,
            }
        ]

    def test_location_serialized(self) -> None:
        location = IssueLocation(section="Why", start_line=3, end_line=4)
        data = to_json(build([_issue(WARNING, "why-too-short", location)]))
        assert data["issues"][0]["location"] == {
            "section": "Why",
            "requirement": None,
            "start_line": 3,
            "end_line": 4,
        }

    def test_build_is_idempotent(self) -> None:
        issues = [_issue(ERROR, "a"), _issue(WARNING, "b", IssueLocation(section="S", start_line=1))]
        first = json.dumps(to_json(build(issues, strict=True)), sort_keys=True)
        second = json.dumps(to_json(build(issues, strict=True)), sort_keys=True)
        assert first == second
