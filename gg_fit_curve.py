"""
Python transcription of https://github.com/erich666/GraphicsGems/blob/master/gems/FitCurves.c

Differences from the C original:
  * max error is measured against an arc length parameterization of the
    fitted curve, not the raw chord length parameters
  * the refinement loop stops early when the worst point stops improving
  * subdivision runs off an explicit stack instead of recursing
"""
from absl import logging
from cubic_bezier import B1, B2, CubicBezier, point_at_t
from cubic_bezier import first_derivative, second_derivative
from picosvg.geometric_types import Point, Vector
from typing import List, Optional, Sequence, Tuple
from vector_helpers import as_point, perpendicular, squared_length, unit


DEFAULT_MAX_ITERATIONS = 20

# Number of chords used to approximate the arc length of a fitted cubic
_ARC_LENGTH_PARTS = 10

# Relative error change under which refinement is considered stalled
_STALL_LOW = 0.9999
_STALL_HIGH = 1.0001


def _tan_left(points: Sequence[Point]) -> Vector:
    assert len(points) > 1
    return unit(points[1] - points[0])


def _tan_right(points: Sequence[Point]) -> Vector:
    assert len(points) > 1
    return unit(points[-2] - points[-1])


def _tan_center(points: Sequence[Point], center: int) -> Vector:
    # Same tangent on both sides of the split point keeps the join smooth
    v = points[center - 1] - points[center + 1]
    if v.x == 0 and v.y == 0:
        # neighbours coincide (the polyline doubles back on itself)
        v = perpendicular(points[center - 1] - points[center])
    return unit(v)


def filter_duplicates(points: Sequence[Point]) -> Tuple[Point, ...]:
    result = []
    for pt in points:
        if result and result[-1] == pt:
            continue
        result.append(pt)
    return tuple(result)


#  Reparameterize:
#     Given set of points and their parameterization, try to find
#     a better parameterization.
def _reparameterize(points, first, last, u, curve) -> Tuple[float, ...]:
    return tuple(
        newton_raphson_root(curve, points[i], u[i - first])
        for i in range(first, last + 1)
    )


def newton_raphson_root(curve: CubicBezier, pt: Point, u: float) -> float:
    # Compute Q(u) - P, Q'(u) and Q''(u)
    d = point_at_t(curve, u) - pt
    curve_prime_pt = first_derivative(curve, u)
    curve_prime_prime_pt = second_derivative(curve, u)

    # Compute f(u)/f'(u)
    numerator = d.dot(curve_prime_pt)
    denominator = squared_length(curve_prime_pt) + 2 * d.dot(curve_prime_prime_pt)
    if denominator == 0.0:
        return u

    # u = u - f(u)/f'(u)
    return u - (numerator / denominator)


# GenerateBezier
def _generate_bezier(points, first, last, u_prime, tan_left, tan_right) -> CubicBezier:
    num_pts = last - first + 1  # number of pts in sub-curve
    pt_first = points[first]
    pt_last = points[last]

    # Create C and X matrices
    C = [[0.0, 0.0], [0.0, 0.0]]
    X = [0.0, 0.0]

    for i in range(num_pts):
        u = u_prime[i]
        a0 = tan_left * B1(u)
        a1 = tan_right * B2(u)

        C[0][0] += a0.dot(a0)
        C[0][1] += a0.dot(a1)
        C[1][0] = C[0][1]
        C[1][1] += a1.dot(a1)

        # Residual against the cubic with both controls on the anchors
        straight = point_at_t((pt_first, pt_first, pt_last, pt_last), u)
        vec_tmp = points[first + i] - straight

        X[0] += a0.dot(vec_tmp)
        X[1] += a1.dot(vec_tmp)

    # Compute the determinants of C and X
    det_C0_C1 = C[0][0] * C[1][1] - C[1][0] * C[0][1]
    det_C0_X = C[0][0] * X[1] - C[1][0] * X[0]
    det_X_C1 = X[0] * C[1][1] - X[1] * C[0][1]

    # Finally, derive alpha values
    alpha_l = alpha_r = 0.0
    if det_C0_C1 != 0.0:
        alpha_l = det_X_C1 / det_C0_C1
        alpha_r = det_C0_X / det_C0_C1

    # If alpha negative, use the Wu/Barsky heuristic (see text)
    # (if alpha is 0, you get coincident control points that lead to
    # divide by zero in any subsequent NewtonRaphsonRootFind() call.
    seg_length = (pt_last - pt_first).norm()
    epsilon = 1.0e-6 * seg_length
    if alpha_l < epsilon or alpha_r < epsilon:
        # fall back on standard (probably inaccurate) formula, and subdivide further if needed.
        alpha_l = alpha_r = seg_length / 3.0

    #  First and last control points of the Bezier curve are
    #  positioned exactly at the first and last data points
    #  Control points 1 and 2 are positioned an alpha distance out
    #  on the tangent vectors, left and right, respectively
    return (
        pt_first,
        pt_first + tan_left * alpha_l,
        pt_last + tan_right * alpha_r,
        pt_last,
    )


# ChordLengthParameterize
#    Assign parameter values to digitized points
#    using relative distances between points.
def _chord_length_parameterize(points, first, last) -> List[float]:
    u = [0.0] * (last - first + 1)
    for i in range(first + 1, last + 1):
        u[i - first] = u[i - first - 1] + (points[i] - points[i - 1]).norm()

    total = u[last - first]
    assert total > 0, "Chord length parameterization needs distinct points"
    for i in range(first + 1, last + 1):
        u[i - first] = u[i - first] / total

    return u


def _arc_length_map(curve: CubicBezier, parts: int = _ARC_LENGTH_PARTS) -> List[float]:
    """Relative arc length at t = 0, 1/parts, ..., 1, approximated by chords."""
    if all(pt == curve[0] for pt in curve[1:]):
        # curve collapsed to a point; evaluating it only yields rounding noise
        return [0.0] * (parts + 1)
    dists = [0.0]
    length = 0.0
    prev = curve[0]
    for i in range(1, parts + 1):
        curr = point_at_t(curve, i / parts)
        length += (curr - prev).norm()
        dists.append(length)
        prev = curr
    if length == 0:
        return dists
    return [d / length for d in dists]


def _find_t(param: float, dist_map: Sequence[float], parts: int = _ARC_LENGTH_PARTS) -> float:
    """Map a relative distance along the curve back to the curve parameter t."""
    if param < 0:
        return 0.0
    if param > 1:
        return 1.0

    for i in range(1, parts + 1):
        if param <= dist_map[i]:
            t_min = (i - 1) / parts
            t_max = i / parts
            len_min = dist_map[i - 1]
            len_max = dist_map[i]
            if len_max == len_min:
                return t_min
            return (param - len_min) / (len_max - len_min) * (t_max - t_min) + t_min
    return 0.0


def _max_error(points, first, last, curve, u) -> Tuple[float, int]:
    """Worst squared distance from the points to the curve, and where it is."""
    max_err = 0.0
    split_at = first + (last - first + 1) // 2
    dist_map = _arc_length_map(curve)
    for i in range(first, last + 1):
        pt = point_at_t(curve, _find_t(u[i - first], dist_map))
        dist = squared_length(pt - points[i])
        if dist > max_err:
            max_err = dist
            split_at = i

    return max_err, split_at


# Fit a Bezier curve to a (sub)set of digitized points
def _fit_cubic(
    points,
    first,
    last,
    tan_left,
    tan_right,
    max_squared_error,
    max_iterations,
) -> Tuple[CubicBezier, Optional[int]]:
    """Fit one cubic to points[first..last].

    Returns the curve and None when it is within max_squared_error, otherwise
    the last attempted curve and the index to split at.
    """
    num_pts = last - first + 1
    assert num_pts > 1

    # Use heuristic for degenerate region
    if num_pts == 2:
        dist = (points[last] - points[first]).norm() / 3.0
        return (
            points[first],
            points[first] + tan_left * dist,
            points[last] + tan_right * dist,
            points[last],
        ), None

    #  Parameterize points, and attempt to fit curve
    u = _chord_length_parameterize(points, first, last)
    curve = _generate_bezier(points, first, last, u, tan_left, tan_right)

    # Find max deviation of points to fitted curve
    max_err, split_pt = _max_error(points, first, last, curve, u)
    if max_err < max_squared_error:
        return curve, None

    # If error not too large, try some reparameterization
    # and iteration
    if max_err < max_squared_error * max_squared_error:
        u_prime = u
        prev_err = max_err
        prev_split_pt = split_pt
        for i in range(max_iterations):
            u_prime = _reparameterize(points, first, last, u_prime, curve)
            curve = _generate_bezier(points, first, last, u_prime, tan_left, tan_right)
            # Error is still measured against the chord length parameters
            max_err, split_pt = _max_error(points, first, last, curve, u)
            if max_err < max_squared_error:
                return curve, None
            if split_pt == prev_split_pt and _STALL_LOW < max_err / prev_err < _STALL_HIGH:
                logging.debug(
                    "Refinement of [%d, %d] stalled after %d passes at %f",
                    first,
                    last,
                    i + 1,
                    max_err,
                )
                break
            prev_err = max_err
            prev_split_pt = split_pt

    # Endpoints are interpolated, split strictly inside the range
    split_pt = min(max(split_pt, first + 1), last - 1)
    return curve, split_pt


def fit_cubics(
    points, max_squared_error, max_iterations=DEFAULT_MAX_ITERATIONS
) -> Tuple[CubicBezier, ...]:
    """Fit a sequence of cubics through points.

    Consecutive duplicate points are dropped first; fewer than two distinct
    points produce no cubics. Adjacent cubics share their end/start point and
    have matching tangent directions there.
    """
    if points is None:
        raise ValueError("points is required")
    if max_squared_error < 0:
        raise ValueError(f"max_squared_error must be >= 0, got {max_squared_error}")
    points = filter_duplicates(tuple(as_point(pt) for pt in points))
    if len(points) < 2:
        return ()

    # Each entry is (first, last, tan_left, tan_right); left halves are
    # pushed last so cubics come off in input order.
    todo = [(0, len(points) - 1, _tan_left(points), _tan_right(points))]
    cubics = []
    while todo:
        first, last, tan_left, tan_right = todo.pop()
        curve, split_pt = _fit_cubic(
            points,
            first,
            last,
            tan_left,
            tan_right,
            max_squared_error,
            max_iterations,
        )
        if split_pt is None:
            cubics.append(curve)
            continue

        # Fitting failed -- split at max error point and fit each side
        logging.debug("Splitting [%d, %d] at %d", first, last, split_pt)
        tan_center = _tan_center(points, split_pt)
        todo.append((split_pt, last, -tan_center, tan_right))
        todo.append((first, split_pt, tan_left, tan_center))

    return tuple(cubics)
