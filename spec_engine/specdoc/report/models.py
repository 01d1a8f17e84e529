"""Report data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from specdoc.validator.models import ValidationIssue


class ReportSummary(BaseModel):
    """Issue counts by severity."""

    model_config = ConfigDict(frozen=True)

    errors: int = 0
    warnings: int = 0
    total: int = 0


class ValidationReport(BaseModel):
    """Outcome of one validation call. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    strict: bool = False
    issues: tuple[ValidationIssue, ...] = Field(default_factory=tuple)
    summary: ReportSummary = Field(default_factory=ReportSummary)
