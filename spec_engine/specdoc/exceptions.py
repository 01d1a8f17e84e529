"""Exception hierarchy for caller contract violations.

Bad document content never raises; it is reported as validation issues.
These exceptions signal that the embedding caller used the engine wrongly,
or that the workspace it pointed at does not exist.
"""

from __future__ import annotations


class SpecDocError(Exception):
    """Base class for all specdoc errors."""


class UnsupportedDocumentKind(SpecDocError):
    """An operation was called on a document of the wrong kind."""

    def __init__(self, operation: str, kind: str) -> None:
        super().__init__(f"{operation} is not defined for documents of kind '{kind}'")
        self.operation = operation
        self.kind = kind


class MissingSectionError(SpecDocError):
    """A section the operation depends on is structurally absent."""

    def __init__(self, heading: str) -> None:
        super().__init__(f"Document has no '{heading}' section")
        self.heading = heading


class RuleDependencyError(SpecDocError):
    """A rule needs an input the caller did not provide."""


class UnknownRuleError(SpecDocError):
    """A rule name was requested that is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No validation rule registered under '{name}'")
        self.name = name


class WorkspaceError(SpecDocError):
    """The openspec directory or a requested item could not be found."""
