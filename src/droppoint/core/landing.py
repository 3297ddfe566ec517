"""
Earliest-land search along a flight segment.

The land/water classifier is opaque (typically a raster lookup), so there is no closed
form for "where does land begin". We sample the inside-interval at a fixed spatial step
and, on the first water -> land transition, bisect the bracket a fixed number of times.

Classifier calls are bounded by `interval_length / step + iterations + 1`.
"""

from __future__ import annotations

from typing import Callable

from droppoint.core.circle import InsideInterval, inside_interval
from droppoint.core.geo import Circle, Point, PointT, Segment, point_at, point_t_at

LandClassifier = Callable[[Point], bool]

DEFAULT_STEP_UNITS = 2.0
DEFAULT_BISECT_ITERATIONS = 14


def _bisect_land_edge(
    segment: Segment, is_land: LandClassifier, lo: float, hi: float, iterations: int
) -> PointT:
    # Invariant: `lo` is water, `hi` is land.
    for _ in range(iterations):
        mid = (lo + hi) / 2
        if is_land(point_at(segment.start, segment.end, mid)):
            hi = mid
        else:
            lo = mid
    return point_t_at(segment.start, segment.end, hi)


def scan_interval(
    segment: Segment,
    interval: InsideInterval,
    is_land: LandClassifier,
    *,
    step_units: float = DEFAULT_STEP_UNITS,
    bisect_iterations: int = DEFAULT_BISECT_ITERATIONS,
) -> PointT | None:
    """Find the first land point within an already-resolved interval of `segment`."""
    if step_units <= 0:
        raise ValueError("step_units must be > 0")
    if bisect_iterations < 0:
        raise ValueError("bisect_iterations must be >= 0")

    span = interval.normalized()
    t_in, t_out = span.t_in, span.t_out

    entry = point_t_at(segment.start, segment.end, t_in)
    if is_land(entry.point):
        return entry

    # A zero-length segment still gets a finite step; its only sample is the entry point.
    seg_len = segment.length() or 1.0
    dt = step_units / seg_len

    prev_t = t_in
    i = 1
    while prev_t < t_out:
        t = min(t_in + i * dt, t_out)
        if is_land(point_at(segment.start, segment.end, t)):
            return _bisect_land_edge(segment, is_land, prev_t, t, bisect_iterations)
        prev_t = t
        i += 1
    return None


def earliest_land_point(
    segment: Segment,
    circle: Circle,
    is_land: LandClassifier,
    *,
    step_units: float = DEFAULT_STEP_UNITS,
    bisect_iterations: int = DEFAULT_BISECT_ITERATIONS,
) -> PointT | None:
    """Earliest point (closest to `segment.start`) inside `circle` that is land.

    Returns `None` when the segment misses the circle or no land is found inside it.
    """
    interval = inside_interval(segment, circle)
    if interval is None:
        return None
    return scan_interval(
        segment,
        interval,
        is_land,
        step_units=step_units,
        bisect_iterations=bisect_iterations,
    )
