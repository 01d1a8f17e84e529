"""Engine settings -- ``openspec/config.yaml`` with environment overrides."""

from __future__ import annotations

import logging
import os
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML, YAMLError

from specdoc.validator.models import ValidationOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"

_INT_ENV = {
    "SPECDOC_MIN_WHY_LENGTH": "min_why_length",
    "SPECDOC_MAX_WHY_LENGTH": "max_why_length",
    "SPECDOC_MAX_DELTAS": "max_deltas",
}


class EngineSettings(BaseModel):
    """Validation knobs and presentation defaults."""

    strict: bool = False
    min_why_length: int = Field(50, ge=0)
    max_why_length: int = Field(1000, ge=1)
    max_deltas: int = Field(10, ge=1)
    tool_name: str = "openspec"

    def validation_options(self, strict: bool | None = None) -> ValidationOptions:
        """Options for one validation call; *strict* overrides the configured default."""
        return ValidationOptions(
            strict=self.strict if strict is None else strict,
            min_why_length=self.min_why_length,
            max_why_length=self.max_why_length,
            max_deltas=self.max_deltas,
        )


def _read_config_file(openspec_dir: Path) -> dict[str, Any]:
    path = openspec_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        data = YAML().load(StringIO(path.read_text(encoding="utf-8")))
    except YAMLError as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get("validation", {})
    values: dict[str, Any] = dict(section) if isinstance(section, dict) else {}
    if "tool_name" in data:
        values["tool_name"] = data["tool_name"]
    return values


def _env_overrides() -> dict[str, Any]:
    values: dict[str, Any] = {}
    strict = os.environ.get("SPECDOC_STRICT")
    if strict:
        values["strict"] = strict.strip().lower() in ("1", "true", "yes", "on")
    for env_name, key in _INT_ENV.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        try:
            values[key] = int(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", env_name, raw)
    tool = os.environ.get("SPECDOC_TOOL_NAME")
    if tool:
        values["tool_name"] = tool
    return values


def load_settings(openspec_dir: Path | None = None) -> EngineSettings:
    """Load settings: defaults, then ``config.yaml``, then ``SPECDOC_*`` env vars."""
    values: dict[str, Any] = {}
    if openspec_dir is not None:
        values.update(_read_config_file(openspec_dir))
    values.update(_env_overrides())
    try:
        return EngineSettings(**values)
    except ValidationError as e:
        logger.warning("Invalid settings %s, falling back to defaults: %s", values, e)
        return EngineSettings()
