from cubic_bezier import first_derivative, point_at_t, second_derivative
from fontTools.misc.bezierTools import cubicPointAtT
from picosvg.geometric_types import Point, Vector
import pytest


CURVE = (Point(0, 0), Point(10, 40), Point(60, -20), Point(100, 10))
STRAIGHT = (Point(0, 0), Point(10 / 3, 0), Point(20 / 3, 0), Point(10, 0))


@pytest.mark.parametrize("t", (0.0, 0.1, 0.25, 0.5, 0.8, 1.0))
def test_point_at_t_matches_fonttools(t):
    expected = cubicPointAtT(*CURVE, t)
    actual = point_at_t(CURVE, t)
    assert actual.x == pytest.approx(expected[0])
    assert actual.y == pytest.approx(expected[1])


def test_point_at_t_interpolates_anchors():
    assert point_at_t(CURVE, 0.0) == CURVE[0]
    assert point_at_t(CURVE, 1.0) == CURVE[3]


def test_first_derivative_endpoints():
    # Q'(0) = 3 (P1 - P0), Q'(1) = 3 (P3 - P2)
    assert first_derivative(CURVE, 0.0) == Vector(30, 120)
    assert first_derivative(CURVE, 1.0) == Vector(120, 90)


@pytest.mark.parametrize("t", (0.2, 0.5, 0.7))
def test_first_derivative_matches_finite_difference(t):
    h = 1e-6
    before = point_at_t(CURVE, t - h)
    after = point_at_t(CURVE, t + h)
    deriv = first_derivative(CURVE, t)
    assert deriv.x == pytest.approx((after.x - before.x) / (2 * h), rel=1e-5, abs=1e-6)
    assert deriv.y == pytest.approx((after.y - before.y) / (2 * h), rel=1e-5, abs=1e-6)


@pytest.mark.parametrize("t", (0.2, 0.5, 0.7))
def test_second_derivative_matches_finite_difference(t):
    h = 1e-5
    before = first_derivative(CURVE, t - h)
    after = first_derivative(CURVE, t + h)
    deriv = second_derivative(CURVE, t)
    assert deriv.x == pytest.approx((after.x - before.x) / (2 * h), rel=1e-5, abs=1e-6)
    assert deriv.y == pytest.approx((after.y - before.y) / (2 * h), rel=1e-5, abs=1e-6)


def test_evenly_spaced_controls_move_at_constant_speed():
    for t in (0.0, 0.3, 0.6, 1.0):
        assert first_derivative(STRAIGHT, t).x == pytest.approx(10)
        assert first_derivative(STRAIGHT, t).y == pytest.approx(0)
        assert second_derivative(STRAIGHT, t).x == pytest.approx(0, abs=1e-12)
