"""FastAPI application -- read-only HTTP surface over the workspace."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

import specdoc.deps as deps
from specdoc import __version__
from specdoc.api.changes import router as changes_router
from specdoc.api.specs import router as specs_router
from specdoc.api.validate import router as validate_router
from specdoc.workspace import Workspace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: open the workspace on startup, drop it on shutdown."""
    log_level = logging.DEBUG if os.environ.get("SPECDOC_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    root = Path(os.environ.get("SPECDOC_ROOT", "."))
    deps._workspace = Workspace(root)
    logger.info(
        "specdoc API starting for %s with settings: %s",
        root.resolve(),
        deps._workspace.settings.model_dump(),
    )

    yield

    deps._workspace = None


app = FastAPI(
    title="specdoc",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(changes_router)
app.include_router(specs_router)
app.include_router(validate_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
