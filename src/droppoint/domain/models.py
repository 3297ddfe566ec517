"""
Domain models (Pydantic).

These types are the "contract" between the planner and its callers:
- CLI/API input (`DropRequest`)
- planner output (`DropPlan`)

The geometry core itself works on frozen dataclasses (`droppoint.core.geo`); these
models only exist at the boundary, where validation (finite coordinates, non-negative
radius) has to happen.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from droppoint.config.settings import MapInfo


class WorldPoint(BaseModel):
    """A point in world (canvas) units."""

    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float


class DropRequest(BaseModel):
    """Flight path + target + radius for one drop computation."""

    model_config = ConfigDict(allow_inf_nan=False)

    start: WorldPoint
    end: WorldPoint
    target: WorldPoint

    map_id: str | None = None
    radius_m: float | None = Field(default=None, ge=0)
    use_mask: bool = True
    settings_overrides: dict[str, Any] | None = None


class Interval(BaseModel):
    """Slice of the flight path (as fractions 0..1) that lies inside the drop circle."""

    t_in: float = Field(..., ge=0, le=1)
    t_out: float = Field(..., ge=0, le=1)


class DropPoint(BaseModel):
    """Landing point in world units plus its fractional position along the flight path."""

    x: float
    y: float
    t: float = Field(..., ge=0, le=1)


class DropPlan(BaseModel):
    """Planner output. `drop` is `None` when no land is reachable inside the circle."""

    generated_at: datetime
    query: DropRequest
    map: MapInfo
    radius_m: float
    radius_units: float
    interval: Interval | None = None
    drop: DropPoint | None = None
    distance_to_target_m: float | None = None
    meta: dict[str, Any] = Field(default_factory=dict)
