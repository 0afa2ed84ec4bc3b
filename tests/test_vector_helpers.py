from picosvg.geometric_types import Point, Vector
import pytest
from vector_helpers import as_point, div, mul, perpendicular, squared_length, unit


@pytest.mark.parametrize(
    "value, expected",
    (
        (Point(1, 2), Point(1, 2)),
        ((1, 2), Point(1.0, 2.0)),
        ([3.5, -1], Point(3.5, -1.0)),
        (Vector(4, 5), Point(4, 5)),
    ),
)
def test_as_point(value, expected):
    pt = as_point(value)
    assert isinstance(pt, Point)
    assert pt == expected


@pytest.mark.parametrize("value", ((1, 2, 3), "ab", 7, None))
def test_as_point_rejects(value):
    with pytest.raises(ValueError):
        as_point(value)


def test_unit():
    v = unit(Vector(3, 4))
    assert v.x == pytest.approx(0.6)
    assert v.y == pytest.approx(0.8)


def test_unit_of_zero_is_zero():
    assert unit(Vector()) == Vector(0, 0)


def test_squared_length():
    assert squared_length(Vector(3, -4)) == 25


def test_perpendicular():
    v = Vector(2, 1)
    assert perpendicular(v) == Vector(-1, 2)
    assert perpendicular(v).dot(v) == 0


def test_component_wise():
    assert mul((2, 3), (4, 5)) == Vector(8, 15)
    assert div((8, 15), (4, 5)) == Vector(2, 3)


def test_operations_leave_operands_alone():
    a = Vector(1, 2)
    b = Vector(3, 4)
    assert a + b == Vector(4, 6)
    assert a * 2 == Vector(2, 4)
    assert a.dot(b) == 11
    assert (a, b) == (Vector(1, 2), Vector(3, 4))
