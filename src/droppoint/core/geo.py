from __future__ import annotations
from dataclasses import dataclass

"""
Planar geometry primitives.

All points live in a single "world space" (the map canvas). Conversion from real-world
meters into world units happens in `droppoint.catalog.maps`, never here.
"""


@dataclass(frozen=True)
class Point:
    """An (x, y) coordinate in world space."""

    x: float
    y: float


@dataclass(frozen=True)
class PointT:
    """A point on a segment plus its fractional position `t` (0 = start, 1 = end)."""

    x: float
    y: float
    t: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class Segment:
    """A directed segment; "earlier" always means closer to `start`."""

    start: Point
    end: Point

    def length(self) -> float:
        return dist2(self.start, self.end) ** 0.5


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def point_at(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation `a + t * (b - a)`."""
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def point_t_at(a: Point, b: Point, t: float) -> PointT:
    p = point_at(a, b, t)
    return PointT(p.x, p.y, t)


def dist2(a: Point, b: Point) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy
