"""Delta data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DeltaOperation(str, Enum):
    """Kind of modification a change applies to a spec."""

    added = "ADDED"
    modified = "MODIFIED"
    removed = "REMOVED"
    renamed = "RENAMED"


class Delta(BaseModel):
    """One atomic modification targeting a single spec."""

    model_config = ConfigDict(frozen=True)

    spec_id: str
    operation: DeltaOperation
    description: str
    renamed_from: str | None = None
    renamed_to: str | None = None
    requirement: str | None = None  # set for deltas read from delta spec files
    line: int | None = None


class DeltaBullet(BaseModel):
    """A "What Changes" list item recognised as naming a spec.

    Bullets with ``malformed_reason`` set produce no Delta; the validation
    rules report them instead.
    """

    model_config = ConfigDict(frozen=True)

    line: int
    text: str
    spec_id: str
    description: str
    operation: DeltaOperation
    renamed_from: str | None = None
    renamed_to: str | None = None
    malformed_reason: str | None = None

    @property
    def well_formed(self) -> bool:
        return self.malformed_reason is None


def delta_to_json(delta: Delta) -> dict:
    """Serialize a Delta the way ``show --json`` prints it."""
    data: dict = {
        "spec": delta.spec_id,
        "operation": delta.operation.value.lower(),
        "description": delta.description,
    }
    if delta.operation is DeltaOperation.renamed:
        data["rename"] = {"from": delta.renamed_from, "to": delta.renamed_to}
    if delta.requirement is not None:
        data["requirement"] = delta.requirement
    return data
