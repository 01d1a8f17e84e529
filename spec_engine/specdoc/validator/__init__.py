"""Rule engine for parsed spec and change documents."""

from specdoc.validator.models import (
    IssueLocation,
    ValidationIssue,
    ValidationOptions,
    ValidationSeverity,
)
from specdoc.validator.pipeline import run_rule, validate
from specdoc.validator.registry import DEFAULT_REGISTRY, FunctionRule, Rule, RuleRegistry

__all__ = [
    "DEFAULT_REGISTRY",
    "FunctionRule",
    "IssueLocation",
    "Rule",
    "RuleRegistry",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationSeverity",
    "run_rule",
    "validate",
]
