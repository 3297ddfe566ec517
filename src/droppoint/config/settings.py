# src/droppoint/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/droppoint/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `DROPPOINT_LOG_LEVEL`, `DROPPOINT_MASK_DIR`)
- an external YAML file via `DROPPOINT_CONFIG_PATH`

Design rule:
- Tuning knobs (scan step, bisection depth, mask thresholds, map sizes) live in YAML,
  not hard-coded in the planner.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from droppoint.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field, model_validator


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `droppoint.config`."""
    text = resources.files("droppoint.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "DropPoint"
    log_level: str = "INFO"


class WorldSettings(BaseModel):
    # Every map is drawn on a square canvas of this many world units per side.
    canvas_units: int = Field(900, gt=0)


class DropSettings(BaseModel):
    default_map: str = "erangel"
    default_radius_m: float = Field(700, ge=0)
    radius_min_m: int = Field(50, gt=0)
    radius_max_m: int = Field(1250, gt=0)
    radius_step_m: int = Field(50, gt=0)

    @model_validator(mode="after")
    def _validate_range(self) -> "DropSettings":
        if self.radius_max_m < self.radius_min_m:
            raise ValueError("drop.radius_max_m must be >= drop.radius_min_m")
        return self

    def radius_options_m(self) -> list[int]:
        return list(range(self.radius_min_m, self.radius_max_m + 1, self.radius_step_m))


class ScanSettings(BaseModel):
    # Lower bound keeps the classifier call count bounded by interval length / step.
    step_units: float = Field(2.0, ge=0.5)
    bisect_iterations: int = Field(14, ge=0, le=64)


class AutoWaterSettings(BaseModel):
    h_min: float = Field(0.45, ge=0, le=1)
    h_max: float = Field(0.72, ge=0, le=1)
    s_min: float = Field(0.22, ge=0, le=1)
    v_min: float = Field(0.12, ge=0, le=1)


class TerrainSettings(BaseModel):
    mask_dir: str = "data/masks"
    alpha_threshold: int = Field(10, ge=0, le=255)
    auto_water: AutoWaterSettings = Field(default_factory=AutoWaterSettings)


class MapInfo(BaseModel):
    id: str
    label: str
    size_km: float = Field(..., gt=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    world: WorldSettings = Field(default_factory=WorldSettings)
    drop: DropSettings = Field(default_factory=DropSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)
    terrain: TerrainSettings = Field(default_factory=TerrainSettings)
    maps: list[MapInfo] = Field(default_factory=list)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)
    log_level = os.getenv("DROPPOINT_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    mask_dir = os.getenv("DROPPOINT_MASK_DIR")
    if mask_dir:
        data.setdefault("terrain", {})["mask_dir"] = mask_dir

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("DROPPOINT_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
