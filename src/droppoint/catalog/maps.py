"""
Map catalog and unit conversion.

Every map is rendered onto the same square canvas (`world.canvas_units` per side), so a
map's physical size fixes how many meters one world unit covers. Radii arrive in meters
and are converted here before reaching the geometry core.
"""

from __future__ import annotations

from droppoint.config.settings import MapInfo, Settings


def list_maps(settings: Settings) -> list[MapInfo]:
    return list(settings.maps)


def get_map(settings: Settings, map_id: str | None) -> MapInfo:
    """Look up a map by id (case-insensitive); `None` means the configured default."""
    wanted = (map_id or settings.drop.default_map).strip().lower()
    for m in settings.maps:
        if m.id.lower() == wanted:
            return m
    known = ", ".join(m.id for m in settings.maps)
    raise ValueError(f"Unknown map '{wanted}'; expected one of: {known}")


def meters_per_unit(map_info: MapInfo, *, canvas_units: int) -> float:
    return map_info.size_km * 1000.0 / float(canvas_units)


def radius_to_units(radius_m: float, map_info: MapInfo, *, canvas_units: int) -> float:
    """Convert a radius in meters into world units for `map_info`."""
    if radius_m < 0:
        raise ValueError("radius_m must be >= 0")
    return float(radius_m) / meters_per_unit(map_info, canvas_units=canvas_units)
