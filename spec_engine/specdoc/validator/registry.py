"""Rule interface and the ordered, read-only rule registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator

from specdoc.deltas.models import Delta
from specdoc.exceptions import UnknownRuleError
from specdoc.parser.models import DocumentKind, ParsedDocument
from specdoc.validator import delta_checks, requirements, sections, why
from specdoc.validator.models import ValidationIssue, ValidationOptions

CheckFn = Callable[[ParsedDocument, list[Delta] | None, ValidationOptions], list[ValidationIssue]]


class Rule(ABC):
    """A single, side-effect-free validation rule."""

    name: str
    kinds: frozenset[DocumentKind]
    needs_deltas: bool = False

    def applies_to(self, doc: ParsedDocument) -> bool:
        return doc.kind in self.kinds

    @abstractmethod
    def evaluate(
        self,
        doc: ParsedDocument,
        deltas: list[Delta] | None,
        options: ValidationOptions,
    ) -> list[ValidationIssue]:
        """Return zero or more issues for *doc*."""
        ...


class FunctionRule(Rule):
    """A Rule backed by a plain check function."""

    def __init__(
        self,
        name: str,
        check: CheckFn,
        kinds: Iterable[DocumentKind],
        needs_deltas: bool = False,
    ) -> None:
        self.name = name
        self.kinds = frozenset(kinds)
        self.needs_deltas = needs_deltas
        self._check = check

    def evaluate(
        self,
        doc: ParsedDocument,
        deltas: list[Delta] | None,
        options: ValidationOptions,
    ) -> list[ValidationIssue]:
        return self._check(doc, deltas, options)

    def __repr__(self) -> str:
        return f"FunctionRule({self.name!r})"


class RuleRegistry:
    """Immutable ordered collection of rules; iteration order is issue order."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        names = [r.name for r in self._rules]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate rule names in registry: {names}")

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self._rules]

    def get(self, name: str) -> Rule:
        for rule in self._rules:
            if rule.name == name:
                return rule
        raise UnknownRuleError(name)

    def select(self, names: Iterable[str]) -> RuleRegistry:
        """Return a registry with only *names*, keeping registration order."""
        wanted = set(names)
        for name in wanted:
            self.get(name)
        return RuleRegistry(r for r in self._rules if r.name in wanted)

    def for_kind(self, kind: DocumentKind) -> list[Rule]:
        return [r for r in self._rules if kind in r.kinds]


_SPEC = [DocumentKind.spec]
_CHANGE = [DocumentKind.change_proposal]

DEFAULT_REGISTRY = RuleRegistry(
    [
        FunctionRule("missing-section", sections.check_required_sections, _SPEC + _CHANGE),
        FunctionRule("why-too-short", why.check_why_too_short, _CHANGE),
        FunctionRule("why-too-long", why.check_why_too_long, _CHANGE),
        FunctionRule("no-requirements", requirements.check_has_requirements, _SPEC),
        FunctionRule("duplicate-requirement", requirements.check_duplicate_requirements, _SPEC),
        FunctionRule("requirement-empty-body", requirements.check_requirement_bodies, _SPEC),
        FunctionRule("requirement-missing-scenario", requirements.check_requirement_scenarios, _SPEC),
        FunctionRule("no-deltas", delta_checks.check_has_deltas, _CHANGE, needs_deltas=True),
        FunctionRule("rename-missing-endpoint", delta_checks.check_rename_endpoints, _CHANGE),
        FunctionRule("delta-missing-description", delta_checks.check_bullet_descriptions, _CHANGE),
        FunctionRule("too-many-deltas", delta_checks.check_delta_count, _CHANGE, needs_deltas=True),
        FunctionRule("duplicate-delta", delta_checks.check_duplicate_deltas, _CHANGE, needs_deltas=True),
    ]
)
