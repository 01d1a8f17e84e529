"""Validation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    error = "error"
    warning = "warning"


class IssueLocation(BaseModel):
    """Where in the document an issue was found."""

    model_config = ConfigDict(frozen=True)

    section: str | None = None
    requirement: str | None = None
    start_line: int | None = None
    end_line: int | None = None

    def describe(self) -> str:
        parts: list[str] = []
        if self.section:
            parts.append(self.section)
        if self.requirement:
            parts.append(f"Requirement: {self.requirement}")
        label = " > ".join(parts)
        if self.start_line is not None:
            lines = f"line {self.start_line}"
            if self.end_line is not None and self.end_line != self.start_line:
                lines = f"lines {self.start_line}-{self.end_line}"
            label = f"{label} ({lines})" if label else lines
        return label


class ValidationIssue(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(frozen=True)

    severity: ValidationSeverity
    code: str
    message: str
    location: IssueLocation | None = None
    rule: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is ValidationSeverity.error


class ValidationOptions(BaseModel):
    """Knobs that rules read; ``strict`` escalates selected warnings."""

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    min_why_length: int = Field(50, ge=0)
    max_why_length: int = Field(1000, ge=1)
    max_deltas: int = Field(10, ge=1)
