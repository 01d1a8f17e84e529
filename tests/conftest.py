"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add spec_engine/ to Python path so `from specdoc.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "spec_engine"))

import pytest

os.environ.pop("SPECDOC_STRICT", None)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def valid_spec_text(fixtures_dir: Path) -> str:
    return (fixtures_dir / "valid_spec.md").read_text(encoding="utf-8")


@pytest.fixture
def valid_change_text(fixtures_dir: Path) -> str:
    return (fixtures_dir / "valid_change.md").read_text(encoding="utf-8")


@pytest.fixture
def workspace_root(tmp_path: Path, valid_spec_text: str, valid_change_text: str) -> Path:
    """A project with one valid spec, one valid change and one change without deltas."""
    openspec = tmp_path / "openspec"
    spec_dir = openspec / "specs" / "user-auth"
    spec_dir.mkdir(parents=True)
    (spec_dir / "spec.md").write_text(valid_spec_text, encoding="utf-8")

    change_dir = openspec / "changes" / "add-2fa"
    (change_dir / "specs" / "user-auth").mkdir(parents=True)
    (change_dir / "proposal.md").write_text(valid_change_text, encoding="utf-8")
    (change_dir / "specs" / "user-auth" / "spec.md").write_text(
        "## ADDED Requirements\n\n"
        "### Requirement: Second Factor\n"
        "The system SHALL require a one-time code after the password.\n\n"
        "#### Scenario: Code accepted\n"
        "- **WHEN** a valid code is entered\n"
        "- **THEN** the session is created\n",
        encoding="utf-8",
    )

    empty_dir = openspec / "changes" / "c-next-steps"
    empty_dir.mkdir(parents=True)
    (empty_dir / "proposal.md").write_text(
        "# Test Change\n\n## Why\n"
        "This is a sufficiently long explanation to pass the why length requirement "
        "for validation purposes.\n\n## What Changes\n"
        "There are changes proposed, but no delta specs provided yet.\n",
        encoding="utf-8",
    )

    (openspec / "changes" / "archive").mkdir()
    return tmp_path
