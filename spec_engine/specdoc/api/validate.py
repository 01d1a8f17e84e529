"""Ad-hoc validation of raw markdown posted by the client."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from specdoc.deps import get_workspace
from specdoc.engine import validate_change, validate_spec
from specdoc.parser import DocumentKind
from specdoc.report import to_json, to_text
from specdoc.workspace import Workspace

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    content: str = Field(..., description="Raw markdown of the document")
    kind: DocumentKind = Field(DocumentKind.change_proposal, description="spec or change-proposal")
    subject_id: str = Field("document", description="Name used in the text rendering")
    strict: bool | None = None


class ValidateResponse(BaseModel):
    valid: bool
    strict: bool
    issues: list[dict[str, Any]] = Field(default_factory=list)
    summary: dict[str, int] = Field(default_factory=dict)
    text: str = ""


@router.post("/validate", response_model=ValidateResponse)
async def validate_document(
    body: ValidateRequest,
    workspace: Workspace = Depends(get_workspace),
) -> ValidateResponse:
    """Validate a document that is not stored in the workspace."""
    options = workspace.settings.validation_options(body.strict)
    if body.kind is DocumentKind.spec:
        report = validate_spec(body.content, options)
    else:
        report = validate_change(body.content, options)
    return ValidateResponse(
        **to_json(report),
        text=to_text(report, body.subject_id, body.kind, workspace.settings.tool_name),
    )
