"""
2D point and vector helpers on top of picosvg's geometric types.

Positions are picosvg Points, directions and offsets are picosvg Vectors.
Point - Point is a Vector, Point + Vector is a Point.
"""
from picosvg.geometric_types import Point, Vector


def as_point(pt) -> Point:
    if isinstance(pt, Point):
        return pt
    if isinstance(pt, Vector):
        return Point(*pt)
    if isinstance(pt, (tuple, list)) and len(pt) == 2:
        return Point(float(pt[0]), float(pt[1]))
    raise ValueError(f"{type(pt)} does not convert to Point")


def unit(v: Vector) -> Vector:
    # picosvg returns None for a zero vector
    v = v.unit()
    if v is None:
        v = Vector()
    return v


def squared_length(v: Vector) -> float:
    return v.x * v.x + v.y * v.y


def perpendicular(v: Vector) -> Vector:
    return Vector(-v.y, v.x)


def mul(a, b) -> Vector:
    """Component-wise product."""
    return Vector(a[0] * b[0], a[1] * b[1])


def div(a, b) -> Vector:
    """Component-wise quotient; b must have no zero component."""
    return Vector(a[0] / b[0], a[1] / b[1])
