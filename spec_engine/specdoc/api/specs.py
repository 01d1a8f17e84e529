"""Spec endpoints: list, show, validate."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from specdoc.deps import get_workspace
from specdoc.engine import show_spec, validate_spec
from specdoc.exceptions import WorkspaceError
from specdoc.report import to_json
from specdoc.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/specs", tags=["specs"])


@router.get("", response_model=list[str])
async def list_specs(workspace: Workspace = Depends(get_workspace)) -> list[str]:
    """Return spec ids."""
    try:
        return workspace.list_specs()
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{spec_id}")
async def get_spec(
    spec_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, Any]:
    try:
        text = workspace.read_spec(spec_id)
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return show_spec(spec_id, text)


@router.get("/{spec_id}/validate")
async def validate_spec_endpoint(
    spec_id: str,
    strict: bool | None = Query(None),
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, Any]:
    """Validate a spec and return the JSON report."""
    try:
        text = workspace.read_spec(spec_id)
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))

    report = validate_spec(text, workspace.settings.validation_options(strict))
    logger.info("Validated spec %s: valid=%s, %d issues", spec_id, report.valid, report.summary.total)
    return {"id": spec_id, **to_json(report)}
