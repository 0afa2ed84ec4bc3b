from lxml import etree
from picosvg.geometric_types import Point
import pytest
from svg_plot import CIRCLE_TAG, PATH_TAG, SVG_TAG, path_data, plot_fit


CUBICS = (
    (Point(0, 0), Point(10 / 3, 0), Point(20 / 3, 0), Point(10, 0)),
    (Point(10, 0), Point(11, 1), Point(12.5, 2), Point(14, 2)),
)


def test_path_data():
    assert path_data(CUBICS) == "M 0,0 C 3.33,0 6.67,0 10,0 C 11,1 12.5,2 14,2"


def test_path_data_empty():
    assert path_data(()) == ""


def test_plot_fit():
    points = (Point(0, 0), Point(5, 0), Point(10, 0), Point(14, 2))
    root = plot_fit(((points, CUBICS),), viewport_size=500, padding=0.1)
    assert root.tag == SVG_TAG
    assert root.attrib["viewBox"] == "0 0 500 500"

    paths = root.findall(PATH_TAG)
    assert len(paths) == 1
    assert paths[0].attrib["d"].startswith("M 50,")
    assert paths[0].attrib["d"].count("C") == len(CUBICS)

    dots = root.findall(CIRCLE_TAG)
    assert len(dots) == len(points)
    for dot in dots:
        assert 50 <= float(dot.attrib["cx"]) <= 450
        assert 50 <= float(dot.attrib["cy"]) <= 450


def test_plot_fit_multiple_series_share_bounds():
    a = ((Point(0, 0), Point(1, 1)), ())
    b = ((Point(9, 9), Point(10, 10)), ())
    root = plot_fit((a, b), viewport_size=100, padding=0.0)
    assert root.findall(PATH_TAG) == []
    cxs = [float(dot.attrib["cx"]) for dot in root.findall(CIRCLE_TAG)]
    assert cxs == pytest.approx([0, 10, 90, 100])


def test_plot_fit_nothing():
    root = plot_fit(())
    assert len(root) == 0


def test_plot_fit_serializes():
    points = (Point(0, 0), Point(10, 0))
    root = plot_fit(((points, CUBICS[:1]),))
    svg = etree.tostring(root).decode("utf-8")
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
