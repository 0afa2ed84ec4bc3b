"""
Bounds of point sets and proportional mapping between rectangles.
"""
from picosvg.geometric_types import Point, Rect
from typing import Callable, Iterable
from vector_helpers import as_point, div, mul


Projection = Callable[[Point], Point]


def bounds_of(points: Iterable[Point]) -> Rect:
    points = tuple(points)
    if not points:
        raise ValueError("No bounds for an empty set of points")
    min_x = min(x for x, _ in points)
    min_y = min(y for _, y in points)
    max_x = max(x for x, _ in points)
    max_y = max(y for _, y in points)
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def _non_degenerate(rect: Rect) -> Rect:
    # a zero extent becomes 1 unit centered on the coordinate so it maps
    # to the middle of the target
    x, y, w, h = rect
    if w == 0:
        x, w = x - 0.5, 1.0
    if h == 0:
        y, h = y - 0.5, 1.0
    return Rect(x, y, w, h)


def project(fr: Rect, to: Rect) -> Projection:
    """Create a function that maps points in fr proportionally onto to.

    Each axis is scaled independently.
    """
    fr = _non_degenerate(fr)
    fr_origin = Point(fr.x, fr.y)
    to_origin = Point(to.x, to.y)
    scale = div((to.w, to.h), (fr.w, fr.h))

    def _project(pt: Point) -> Point:
        return to_origin + mul(as_point(pt) - fr_origin, scale)

    return _project
