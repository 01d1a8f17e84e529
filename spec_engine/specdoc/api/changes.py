"""Change proposal endpoints: list, show, validate."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from specdoc.deps import get_workspace
from specdoc.engine import show_change, validate_change
from specdoc.exceptions import WorkspaceError
from specdoc.report import to_json
from specdoc.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/changes", tags=["changes"])


@router.get("", response_model=list[str])
async def list_changes(workspace: Workspace = Depends(get_workspace)) -> list[str]:
    """Return active change ids."""
    try:
        return workspace.list_changes()
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{change_id}")
async def get_change(
    change_id: str,
    deltas_only: bool = Query(False),
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, Any]:
    """Return the change with its parsed deltas."""
    try:
        text = workspace.read_change(change_id)
        spec_deltas = workspace.change_spec_deltas(change_id)
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return show_change(change_id, text, spec_deltas, deltas_only)


@router.get("/{change_id}/validate")
async def validate_change_endpoint(
    change_id: str,
    strict: bool | None = Query(None),
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, Any]:
    """Validate a change and return the JSON report."""
    try:
        text = workspace.read_change(change_id)
        spec_deltas = workspace.change_spec_deltas(change_id)
    except WorkspaceError as e:
        raise HTTPException(status_code=404, detail=str(e))

    report = validate_change(text, workspace.settings.validation_options(strict), spec_deltas)
    logger.info(
        "Validated change %s: valid=%s, %d issues",
        change_id,
        report.valid,
        report.summary.total,
    )
    return {"id": change_id, **to_json(report)}
