"""Validation report aggregation and rendering."""

from specdoc.report.builder import build, issue_to_json, to_json
from specdoc.report.models import ReportSummary, ValidationReport
from specdoc.report.text import format_issue, next_steps, to_text

__all__ = [
    "ReportSummary",
    "ValidationReport",
    "build",
    "format_issue",
    "issue_to_json",
    "next_steps",
    "to_json",
    "to_text",
]
