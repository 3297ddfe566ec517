"""
API routes.

Endpoints:
- POST `/api/drop`: main planner entrypoint.
- GET  `/api/maps`: map catalog with scale and radius options.
- GET  `/api/settings`: public settings for UI defaults.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from droppoint.catalog.maps import list_maps, meters_per_unit
from droppoint.config.settings import get_settings
from droppoint.domain.models import DropPlan, DropRequest
from droppoint.planner.drop import plan_drop

router = APIRouter()


@router.post("/api/drop", response_model=DropPlan)
def post_drop(request: DropRequest) -> DropPlan:
    """Run the planner for one flight path / target / radius."""
    settings = get_settings()
    try:
        return plan_drop(request, settings=settings)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": str(e)},
        ) from e


@router.get("/api/maps")
def get_maps() -> dict:
    """Return known maps with meters-per-unit, plus the selectable radius options."""
    settings = get_settings()
    canvas_units = settings.world.canvas_units
    maps = [
        {
            **m.model_dump(mode="json"),
            "meters_per_unit": meters_per_unit(m, canvas_units=canvas_units),
        }
        for m in list_maps(settings)
    ]
    return {
        "canvas_units": canvas_units,
        "default_map": settings.drop.default_map,
        "default_radius_m": settings.drop.default_radius_m,
        "radius_options_m": settings.drop.radius_options_m(),
        "maps": maps,
    }


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return safe-to-expose settings for UI defaults (filesystem paths removed)."""
    data = get_settings().model_dump(mode="json")
    data.get("terrain", {}).pop("mask_dir", None)
    return {
        "app": {"name": data.get("app", {}).get("name", "DropPoint")},
        "world": data.get("world", {}),
        "drop": data.get("drop", {}),
        "scan": data.get("scan", {}),
        "terrain": data.get("terrain", {}),
    }
