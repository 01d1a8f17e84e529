"""Shared FastAPI dependencies."""

from __future__ import annotations

from specdoc.workspace import Workspace

_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """FastAPI dependency: return the shared Workspace."""
    assert _workspace is not None, "Workspace not initialised"
    return _workspace
