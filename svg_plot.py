"""
Render fitted cubics and the points they were fitted to as SVG.
"""
from cubic_bezier import CubicBezier
from lxml import etree
from picosvg.geometric_types import Point, Rect
from picosvg.svg_meta import ntos, svgns
from rect_projection import bounds_of, project
from typing import Sequence, Tuple
from vector_helpers import as_point


DEFAULT_VIEWPORT_SIZE = 500
DEFAULT_PADDING = 0.1

SVG_TAG = f"{{{svgns()}}}svg"
PATH_TAG = f"{{{svgns()}}}path"
CIRCLE_TAG = f"{{{svgns()}}}circle"

Series = Tuple[Sequence[Point], Sequence[CubicBezier]]


def _coordstr(c):
    return ntos(round(c, 2))


def _ptstr(pt):
    return f"{_coordstr(pt[0])},{_coordstr(pt[1])}"


def path_data(cubics: Sequence[CubicBezier]) -> str:
    cmds = []
    for i, (start, c0, c1, end) in enumerate(cubics):
        if i == 0:
            cmds.append(f"M {_ptstr(start)}")
        cmds.append(f"C {_ptstr(c0)} {_ptstr(c1)} {_ptstr(end)}")
    return " ".join(cmds)


def _dot(parent, at, radius, color):
    dot = etree.SubElement(parent, CIRCLE_TAG)
    dot.attrib["fill"] = color
    dot.attrib["opacity"] = "0.5"
    dot.attrib["cx"] = _coordstr(at[0])
    dot.attrib["cy"] = _coordstr(at[1])
    dot.attrib["r"] = _coordstr(radius)


def plot_fit(
    series: Sequence[Series],
    viewport_size: float = DEFAULT_VIEWPORT_SIZE,
    padding: float = DEFAULT_PADDING,
):
    """Build an <svg> tree with one path plus dots per (points, cubics) pair.

    All series share one projection from the bounds of every input point onto
    the viewport, less padding (a fraction of the viewport) on each side.
    """
    assert 0 <= padding < 0.5, f"padding must be in [0, 0.5): {padding}"
    root = etree.Element(SVG_TAG, nsmap={None: svgns()})
    root.attrib["version"] = "1.1"
    root.attrib["viewBox"] = " ".join(
        ntos(v) for v in (0, 0, viewport_size, viewport_size)
    )

    all_points = [as_point(pt) for points, _ in series for pt in points]
    if not all_points:
        return root

    inset = viewport_size * padding
    viewport = Rect(inset, inset, viewport_size - 2 * inset, viewport_size - 2 * inset)
    tx = project(bounds_of(all_points), viewport)

    for points, cubics in series:
        if cubics:
            path = etree.SubElement(root, PATH_TAG)
            path.attrib["fill"] = "none"
            path.attrib["stroke"] = "black"
            path.attrib["stroke-width"] = "1"
            path.attrib["d"] = path_data(
                [tuple(tx(pt) for pt in cubic) for cubic in cubics]
            )
        for pt in points:
            _dot(root, tx(pt), radius=2, color="darkblue")

    return root
