"""Tests for the FastAPI endpoints."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from specdoc.main import app


@pytest.fixture
def client(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("SPECDOC_ROOT", str(workspace_root))
    with TestClient(app) as c:
        yield c


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestChanges:
    def test_list(self, client: TestClient) -> None:
        assert client.get("/api/changes").json() == ["add-2fa", "c-next-steps"]

    def test_show_deltas_only(self, client: TestClient) -> None:
        resp = client.get("/api/changes/add-2fa", params={"deltas_only": True})
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) == {"id", "deltas"}
        assert len(data["deltas"]) == 4

    def test_validate(self, client: TestClient) -> None:
        data = client.get("/api/changes/c-next-steps/validate").json()
        assert data["id"] == "c-next-steps"
        assert data["valid"] is False
        assert data["issues"][0]["code"] == "no-deltas"

    def test_unknown_change_404(self, client: TestClient) -> None:
        resp = client.get("/api/changes/nope")
        assert resp.status_code == 404
        assert "Available IDs" in resp.json()["detail"]


class TestSpecs:
    def test_show(self, client: TestClient) -> None:
        data = client.get("/api/specs/user-auth").json()
        assert data["requirementCount"] == 2

    def test_validate_strict(self, client: TestClient) -> None:
        data = client.get("/api/specs/user-auth/validate", params={"strict": True}).json()
        assert data["valid"] is True
        assert data["strict"] is True


class TestValidateContent:
    def test_spec_without_scenario(self, client: TestClient) -> None:
        body = {
            "content": "## Purpose\nShort purpose.\n\n## Requirements\n\n### Requirement: X\nText",
            "kind": "spec",
            "subject_id": "draft",
            "strict": True,
        }
        data = client.post("/api/validate", json=body).json()
        assert data["valid"] is False
        assert data["issues"][0]["code"] == "requirement-missing-scenario"
        assert data["issues"][0]["severity"] == "error"
        assert data["text"].startswith("Specification 'draft' has issues")

    def test_change_defaults(self, client: TestClient) -> None:
        body = {"content": "## Why\ntoo short\n\n## What Changes\n- **auth:** Add login\n"}
        data = client.post("/api/validate", json=body).json()
        assert data["valid"] is True
        assert data["summary"]["warnings"] == 1
