"""
Cubic bezier evaluation in Bernstein form.

https://pomax.github.io/bezierinfo/#derivatives
"""
from picosvg.geometric_types import Point, Vector
from typing import Tuple


CubicBezier = Tuple[Point, Point, Point, Point]


# B0, B1, B2, B3 :
# Bezier multipliers


def B0(u: float) -> float:
    tmp = 1.0 - u
    return tmp * tmp * tmp


def B1(u: float) -> float:
    tmp = 1.0 - u
    return 3 * u * (tmp * tmp)


def B2(u: float) -> float:
    tmp = 1.0 - u
    return 3 * u * u * tmp


def B3(u: float) -> float:
    return u * u * u


def point_at_t(curve: CubicBezier, t: float) -> Point:
    p0, p1, p2, p3 = curve
    b0, b1, b2, b3 = B0(t), B1(t), B2(t), B3(t)
    return Point(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )


def first_derivative(curve: CubicBezier, t: float) -> Vector:
    # derivative is a quad on the control point deltas
    p0, p1, p2, p3 = curve
    tmp = 1.0 - t
    return (
        (p1 - p0) * (3 * tmp * tmp)
        + (p2 - p1) * (6 * tmp * t)
        + (p3 - p2) * (3 * t * t)
    )


def second_derivative(curve: CubicBezier, t: float) -> Vector:
    p0, p1, p2, p3 = curve
    # P0 - 2 * P1 + P2 and P1 - 2 * P2 + P3
    a = (p2 - p1) - (p1 - p0)
    b = (p3 - p2) - (p2 - p1)
    return a * (6 * (1.0 - t)) + b * (6 * t)
