"""
Segment vs. circle geometry.

Two operations:
- `intersect_segment_circle`: where the segment crosses the circle boundary.
- `inside_interval`: which slice of the segment parameter `t` lies inside the circle.

Both are pure and never raise on degenerate input (zero-length segment, zero radius,
far-away circle); "nothing inside" is reported as an empty list / `None`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from droppoint.core.geo import Circle, Point, PointT, Segment, clamp, dist2, point_t_at

# Two roots closer than this are the same (tangent) crossing.
TANGENT_EPS = 1e-6
# Slack on squared distance for the endpoint-inside test.
INSIDE_SLACK = 1e-3


@dataclass(frozen=True)
class InsideInterval:
    """Sub-range `[t_in, t_out]` of the segment parameter lying inside the circle."""

    t_in: float
    t_out: float

    def normalized(self) -> "InsideInterval":
        """Clamp both ends to [0, 1] and order them so that `t_in <= t_out`."""
        t_in = clamp(self.t_in, 0.0, 1.0)
        t_out = clamp(self.t_out, 0.0, 1.0)
        if t_out < t_in:
            t_in, t_out = t_out, t_in
        return InsideInterval(t_in=t_in, t_out=t_out)


def point_inside(p: Point, circle: Circle) -> bool:
    return dist2(p, circle.center) <= circle.radius * circle.radius + INSIDE_SLACK


def intersect_segment_circle(segment: Segment, circle: Circle) -> list[PointT]:
    """Return boundary crossings of `segment` with `circle`, ascending by `t`.

    Solves `a*t^2 + b*t + c = 0` for the line `A + t*(B - A)`. The plain quadratic
    formula is used; with `a > 0` the cancellation error is small enough for map-scale
    coordinates.
    """
    a_pt, b_pt, c_pt = segment.start, segment.end, circle.center
    dx = b_pt.x - a_pt.x
    dy = b_pt.y - a_pt.y
    fx = a_pt.x - c_pt.x
    fy = a_pt.y - c_pt.y

    a = dx * dx + dy * dy
    b = 2 * (fx * dx + fy * dy)
    c = fx * fx + fy * fy - circle.radius * circle.radius

    # A zero-length segment cannot cross anything.
    if a == 0:
        return []
    disc = b * b - 4 * a * c
    if disc < 0:
        return []

    sqrt_disc = math.sqrt(disc)
    t1 = (-b - sqrt_disc) / (2 * a)
    t2 = (-b + sqrt_disc) / (2 * a)

    roots = [t1]
    if abs(t2 - t1) > TANGENT_EPS:
        roots.append(t2)

    out = [point_t_at(a_pt, b_pt, t) for t in roots if 0 <= t <= 1]
    out.sort(key=lambda p: p.t)
    return out


def inside_interval(segment: Segment, circle: Circle) -> InsideInterval | None:
    """Resolve the part of `segment` that lies inside (or on) `circle`.

    Returns `None` when the segment stays outside. The result is raw: it may extend
    slightly past [0, 1] in the tangent case, so callers use `.normalized()`.
    """
    start_inside = point_inside(segment.start, circle)
    end_inside = point_inside(segment.end, circle)

    crossings = intersect_segment_circle(segment, circle)

    if len(crossings) >= 2:
        return InsideInterval(t_in=crossings[0].t, t_out=crossings[-1].t)

    if len(crossings) == 1:
        t = crossings[0].t
        if start_inside and not end_inside:
            return InsideInterval(t_in=0.0, t_out=t)
        if not start_inside and end_inside:
            return InsideInterval(t_in=t, t_out=1.0)
        if start_inside and end_inside:
            # Near-tangent graze with both ends interior; the crossing is noise.
            return InsideInterval(t_in=0.0, t_out=1.0)
        # Tangent touch with both ends outside.
        return InsideInterval(t_in=t - TANGENT_EPS, t_out=t + TANGENT_EPS)

    if start_inside and end_inside:
        return InsideInterval(t_in=0.0, t_out=1.0)
    return None
