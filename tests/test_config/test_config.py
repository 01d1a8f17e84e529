"""Tests for settings loading from config.yaml and the environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from specdoc.config import EngineSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SPECDOC_STRICT",
        "SPECDOC_MIN_WHY_LENGTH",
        "SPECDOC_MAX_WHY_LENGTH",
        "SPECDOC_MAX_DELTAS",
        "SPECDOC_TOOL_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings == EngineSettings()
        assert settings.min_why_length == 50
        assert settings.tool_name == "openspec"

    def test_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text(
            "tool_name: specdoc\nvalidation:\n  strict: true\n  min_why_length: 80\n",
            encoding="utf-8",
        )
        settings = load_settings(tmp_path)
        assert settings.strict is True
        assert settings.min_why_length == 80
        assert settings.tool_name == "specdoc"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "config.yaml").write_text("validation:\n  max_deltas: 4\n", encoding="utf-8")
        monkeypatch.setenv("SPECDOC_MAX_DELTAS", "12")
        monkeypatch.setenv("SPECDOC_STRICT", "yes")
        settings = load_settings(tmp_path)
        assert settings.max_deltas == 12
        assert settings.strict is True

    def test_invalid_env_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECDOC_MIN_WHY_LENGTH", "not_a_number")
        assert load_settings().min_why_length == 50

    def test_unreadable_yaml_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("validation: [unclosed\n", encoding="utf-8")
        assert load_settings(tmp_path) == EngineSettings()

    def test_out_of_range_values_fall_back(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("validation:\n  max_deltas: 0\n", encoding="utf-8")
        assert load_settings(tmp_path).max_deltas == 10


class TestValidationOptions:
    def test_strict_override(self) -> None:
        settings = EngineSettings(strict=True, min_why_length=10)
        assert settings.validation_options().strict is True
        assert settings.validation_options(strict=False).strict is False
        assert settings.validation_options().min_why_length == 10
