"""Validation pipeline -- runs the registered rules over a parsed document."""

from __future__ import annotations

import logging

from specdoc.deltas.models import Delta
from specdoc.exceptions import RuleDependencyError
from specdoc.parser.models import ParsedDocument
from specdoc.validator.models import ValidationIssue, ValidationOptions, ValidationSeverity
from specdoc.validator.registry import DEFAULT_REGISTRY, Rule, RuleRegistry

logger = logging.getLogger(__name__)


def _sort_key(issue: ValidationIssue) -> int:
    if issue.location is None or issue.location.start_line is None:
        return 0
    return issue.location.start_line


def run_rule(
    rule: Rule,
    doc: ParsedDocument,
    deltas: list[Delta] | None,
    options: ValidationOptions,
) -> list[ValidationIssue]:
    """Run one rule in isolation.

    A rule that raises, or returns anything but ValidationIssues, yields a
    single ``rule-failed`` error.
    """
    try:
        issues = [_tag(issue, rule.name) for issue in rule.evaluate(doc, deltas, options)]
        return sorted(issues, key=_sort_key)
    except Exception as exc:
        logger.exception("Validation rule '%s' failed", rule.name)
        return [
            ValidationIssue(
                severity=ValidationSeverity.error,
                code="rule-failed",
                message=f"Validation rule '{rule.name}' failed: {exc}",
                rule=rule.name,
            )
        ]


def _tag(issue: object, rule_name: str) -> ValidationIssue:
    if not isinstance(issue, ValidationIssue):
        raise TypeError(f"expected ValidationIssue, got {type(issue).__name__}")
    return issue if issue.rule else issue.model_copy(update={"rule": rule_name})


def validate(
    doc: ParsedDocument,
    deltas: list[Delta] | None = None,
    options: ValidationOptions | None = None,
    registry: RuleRegistry | None = None,
) -> list[ValidationIssue]:
    """Run every applicable rule and return issues in a deterministic order.

    Order is rule registration order, then document order within a rule.
    Raises RuleDependencyError when a change proposal is validated without
    its deltas and a registered rule needs them.
    """
    options = options or ValidationOptions()
    registry = registry if registry is not None else DEFAULT_REGISTRY
    rules = registry.for_kind(doc.kind)

    if deltas is None:
        needy = [r.name for r in rules if r.needs_deltas]
        if needy:
            raise RuleDependencyError(
                f"Rules {', '.join(needy)} need the change's deltas; "
                "pass deltas=[] when there are none"
            )

    issues: list[ValidationIssue] = []
    for rule in rules:
        issues.extend(run_rule(rule, doc, deltas, options))

    logger.debug(
        "Validated %s document with %d rules: %d issues (strict=%s)",
        doc.kind.value,
        len(rules),
        len(issues),
        options.strict,
    )
    return issues
