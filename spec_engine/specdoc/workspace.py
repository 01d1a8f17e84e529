"""Workspace -- locates and reads specs and changes under ``openspec/``."""

from __future__ import annotations

import logging
from pathlib import Path

from specdoc.config import EngineSettings, load_settings
from specdoc.deltas import Delta, extract_spec_deltas
from specdoc.exceptions import WorkspaceError
from specdoc.parser import DocumentKind, parse

logger = logging.getLogger(__name__)

OPENSPEC_DIR = "openspec"
ARCHIVE_DIR = "archive"
PROPOSAL_FILE = "proposal.md"
SPEC_FILE = "spec.md"


class Workspace:
    """File-system view of a project's ``openspec/`` directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)
        self._openspec = self._root / OPENSPEC_DIR
        self._settings: EngineSettings | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def openspec_dir(self) -> Path:
        return self._openspec

    @property
    def changes_dir(self) -> Path:
        return self._openspec / "changes"

    @property
    def specs_dir(self) -> Path:
        return self._openspec / "specs"

    @property
    def settings(self) -> EngineSettings:
        if self._settings is None:
            self._settings = load_settings(self._openspec if self._openspec.is_dir() else None)
        return self._settings

    def ensure_exists(self) -> None:
        if not self._openspec.is_dir():
            raise WorkspaceError(
                f"No '{OPENSPEC_DIR}' directory found in {self._root}"
            )

    # -- discovery ---------------------------------------------------------

    def list_changes(self) -> list[str]:
        """Active change ids (directories holding a proposal.md), sorted."""
        self.ensure_exists()
        if not self.changes_dir.is_dir():
            return []
        return sorted(
            p.name
            for p in self.changes_dir.iterdir()
            if p.is_dir() and p.name != ARCHIVE_DIR and (p / PROPOSAL_FILE).is_file()
        )

    def list_specs(self) -> list[str]:
        """Spec ids (directories holding a spec.md), sorted."""
        self.ensure_exists()
        if not self.specs_dir.is_dir():
            return []
        return sorted(
            p.name
            for p in self.specs_dir.iterdir()
            if p.is_dir() and (p / SPEC_FILE).is_file()
        )

    # -- reading -----------------------------------------------------------

    def _read(self, path: Path, what: str, item_id: str, available: list[str]) -> str:
        if not path.is_file():
            listing = ", ".join(available) if available else "none"
            raise WorkspaceError(f"{what} '{item_id}' not found. Available IDs: {listing}")
        return path.read_text(encoding="utf-8")

    def read_change(self, change_id: str) -> str:
        return self._read(
            self.changes_dir / change_id / PROPOSAL_FILE,
            "Change",
            change_id,
            self.list_changes(),
        )

    def read_spec(self, spec_id: str) -> str:
        return self._read(
            self.specs_dir / spec_id / SPEC_FILE,
            "Spec",
            spec_id,
            self.list_specs(),
        )

    def change_spec_deltas(self, change_id: str) -> list[Delta]:
        """Deltas from ``changes/<id>/specs/<spec-id>/spec.md`` files, by spec id."""
        specs_dir = self.changes_dir / change_id / "specs"
        if not specs_dir.is_dir():
            return []
        deltas: list[Delta] = []
        for spec_dir in sorted(p for p in specs_dir.iterdir() if p.is_dir()):
            spec_path = spec_dir / SPEC_FILE
            if not spec_path.is_file():
                continue
            doc = parse(spec_path.read_text(encoding="utf-8"), DocumentKind.spec)
            found = extract_spec_deltas(spec_dir.name, doc)
            logger.debug("Delta spec %s: %d deltas", spec_path, len(found))
            deltas.extend(found)
        return deltas
