from __future__ import annotations

# This module is the orchestrator for a drop computation. It wires together:
# - domain input (DropRequest)
# - map catalog (meters -> world units)
# - terrain (which land classifier to use)
# - the geometry core (inside-interval + earliest-land scan)
# and returns a DropPlan for the CLI/API.

import logging
import math
import time
from datetime import datetime, timezone
from typing import Any

from droppoint.catalog.maps import get_map, meters_per_unit, radius_to_units
from droppoint.config.overrides import apply_settings_overrides
from droppoint.config.settings import Settings, get_settings
from droppoint.core.circle import inside_interval
from droppoint.core.geo import Circle, Point, PointT, Segment, dist2
from droppoint.core.landing import LandClassifier, earliest_land_point
from droppoint.domain.models import DropPlan, DropPoint, DropRequest, Interval, WorldPoint
from droppoint.terrain.mask import always_land
from droppoint.terrain.store import classifier_for_map

logger = logging.getLogger(__name__)


def find_drop_point(
    start: Point,
    end: Point,
    target: Point,
    radius: float,
    is_land: LandClassifier,
    *,
    step_units: float | None = None,
    bisect_iterations: int | None = None,
) -> PointT | None:
    """Earliest land point on `start -> end` within `radius` of `target` (all in world units)."""
    kwargs: dict[str, Any] = {}
    if step_units is not None:
        kwargs["step_units"] = step_units
    if bisect_iterations is not None:
        kwargs["bisect_iterations"] = bisect_iterations
    return earliest_land_point(Segment(start, end), Circle(target, radius), is_land, **kwargs)


class _CountingClassifier:
    """Wraps a classifier and counts how often the planner consults it."""

    def __init__(self, inner: LandClassifier):
        self._inner = inner
        self.calls = 0

    def __call__(self, point: Point) -> bool:
        self.calls += 1
        return bool(self._inner(point))


def _to_point(p: WorldPoint) -> Point:
    return Point(float(p.x), float(p.y))


def plan_drop(
    request: DropRequest,
    *,
    settings: Settings | None = None,
    classifier: LandClassifier | None = None,
) -> DropPlan:
    """Compute a DropPlan for `request`.

    `classifier` wins when given; otherwise the map's stored mask is used (if
    `request.use_mask`), falling back to "land everywhere".
    """
    started = time.perf_counter()
    settings = settings or get_settings()
    settings = apply_settings_overrides(settings, request.settings_overrides)

    map_info = get_map(settings, request.map_id)
    canvas_units = settings.world.canvas_units
    radius_m = float(request.radius_m if request.radius_m is not None else settings.drop.default_radius_m)
    radius_units = radius_to_units(radius_m, map_info, canvas_units=canvas_units)

    if classifier is not None:
        source = "custom"
    elif request.use_mask:
        classifier = classifier_for_map(settings, map_info.id)
        source = "none" if classifier is always_land else "mask"
    else:
        classifier = always_land
        source = "none"
    counting = _CountingClassifier(classifier)

    segment = Segment(_to_point(request.start), _to_point(request.end))
    circle = Circle(_to_point(request.target), radius_units)

    # Reported alongside the drop; the scan resolves the same interval internally.
    raw = inside_interval(segment, circle)
    interval = raw.normalized() if raw is not None else None
    drop = find_drop_point(
        segment.start,
        segment.end,
        circle.center,
        radius_units,
        counting,
        step_units=settings.scan.step_units,
        bisect_iterations=settings.scan.bisect_iterations,
    )

    distance_m = None
    if drop is not None:
        mpu = meters_per_unit(map_info, canvas_units=canvas_units)
        distance_m = math.sqrt(dist2(drop.point, circle.center)) * mpu

    logger.debug(
        "Drop plan map=%s radius_m=%.0f interval=%s drop=%s classifier=%s calls=%d",
        map_info.id,
        radius_m,
        interval,
        drop,
        source,
        counting.calls,
    )

    return DropPlan(
        generated_at=datetime.now(timezone.utc),
        query=request,
        map=map_info,
        radius_m=radius_m,
        radius_units=radius_units,
        interval=Interval(t_in=interval.t_in, t_out=interval.t_out) if interval is not None else None,
        drop=DropPoint(x=drop.x, y=drop.y, t=drop.t) if drop is not None else None,
        distance_to_target_m=distance_m,
        meta={
            "classifier": source,
            "classifier_calls": counting.calls,
            "scan": settings.scan.model_dump(mode="json"),
            "planner_ms": int((time.perf_counter() - started) * 1000),
        },
    )
