"""Text-in, data-out entry points used by the CLI and the API.

Every function here is a pure function of its arguments; no I/O.
"""

from __future__ import annotations

from typing import Any

from specdoc.deltas import Delta, delta_to_json, extract_deltas
from specdoc.exceptions import MissingSectionError
from specdoc.parser import DocumentKind, ParsedDocument, parse
from specdoc.report import ValidationReport, build
from specdoc.validator import ValidationOptions, validate


def change_deltas(doc: ParsedDocument, spec_deltas: list[Delta] | None = None) -> list[Delta]:
    """Proposal bullet deltas followed by delta-spec deltas.

    A proposal without "What Changes" contributes nothing here; the
    missing-section rule reports it.
    """
    try:
        deltas = extract_deltas(doc)
    except MissingSectionError:
        deltas = []
    return deltas + list(spec_deltas or [])


def validate_spec(text: str, options: ValidationOptions | None = None) -> ValidationReport:
    """Parse and validate a spec document."""
    options = options or ValidationOptions()
    doc = parse(text, DocumentKind.spec)
    return build(validate(doc, None, options), options.strict)


def validate_change(
    text: str,
    options: ValidationOptions | None = None,
    spec_deltas: list[Delta] | None = None,
) -> ValidationReport:
    """Parse and validate a change proposal.

    *spec_deltas* come from the change's delta spec files and count toward
    its deltas alongside the proposal bullets.
    """
    options = options or ValidationOptions()
    doc = parse(text, DocumentKind.change_proposal)
    deltas = change_deltas(doc, spec_deltas)
    return build(validate(doc, deltas, options), options.strict)


def show_change(
    change_id: str,
    text: str,
    spec_deltas: list[Delta] | None = None,
    deltas_only: bool = False,
) -> dict[str, Any]:
    """JSON payload for ``change show``."""
    doc = parse(text, DocumentKind.change_proposal)
    deltas = [delta_to_json(d) for d in change_deltas(doc, spec_deltas)]
    if deltas_only:
        return {"id": change_id, "deltas": deltas}
    why = doc.section("Why")
    return {
        "id": change_id,
        "title": doc.title or change_id,
        "why": why.body if why is not None else "",
        "deltaCount": len(deltas),
        "deltas": deltas,
    }


def show_spec(spec_id: str, text: str) -> dict[str, Any]:
    """JSON payload for ``spec show``."""
    doc = parse(text, DocumentKind.spec)
    purpose = doc.section("Purpose")
    return {
        "id": spec_id,
        "title": doc.title or spec_id,
        "overview": purpose.body if purpose is not None else "",
        "requirementCount": len(doc.requirements),
        "requirements": [
            {
                "name": r.name,
                "text": r.body,
                "scenarios": [
                    {"description": s.description, "lines": list(s.lines)}
                    for s in r.scenarios
                ],
            }
            for r in doc.requirements
        ],
    }
