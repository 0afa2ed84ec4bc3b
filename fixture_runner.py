"""
Runs recorded fit_cubics calls and checks the results.

A fixture file looks like:
  {"fit": [{"args": [[[x, y], ...], max_sqr_err], "returns": [[[x, y] * 4], ...]}]}

Every case is PASSED, FAILED (returned a different spline) or ERRORED (raised).

Usage:
  python fixture_runner.py testdata/fit_cases.json --svg_dir /tmp/fits
"""
from absl import app
from absl import flags
from absl import logging
import enum
from gg_fit_curve import fit_cubics
from helpers import load_fixtures, write_xml
from pathlib import Path
from svg_plot import plot_fit
import time
from typing import Callable, NamedTuple, Optional, Sequence, Tuple
from vector_helpers import as_point


DEFAULT_TOLERANCE = 0.0001

FLAGS = flags.FLAGS

flags.DEFINE_string("svg_dir", None, "If set, write case_<n>.svg for every case here")
flags.DEFINE_float(
    "fixture_tolerance",
    DEFAULT_TOLERANCE,
    "Max absolute difference per coordinate between expected and actual",
)


class Outcome(enum.Enum):
    PASSED = enum.auto()
    FAILED = enum.auto()
    ERRORED = enum.auto()


class FixtureCase(NamedTuple):
    points: Tuple
    max_squared_error: float
    expected: Tuple


class FixtureResult(NamedTuple):
    index: int
    case: FixtureCase
    actual: Optional[Tuple]
    elapsed: float
    error: Optional[Exception]
    issues: Tuple[str, ...]

    @property
    def outcome(self) -> Outcome:
        if self.error is not None:
            return Outcome.ERRORED
        if self.issues:
            return Outcome.FAILED
        return Outcome.PASSED


def _as_cubic(raw):
    assert len(raw) == 4, f"A cubic needs 4 points, got {len(raw)}"
    return tuple(as_point(pt) for pt in raw)


def case_from_raw(raw) -> FixtureCase:
    points, max_squared_error = raw["args"]
    return FixtureCase(
        tuple(as_point(pt) for pt in points),
        float(max_squared_error),
        tuple(_as_cubic(cubic) for cubic in raw["returns"]),
    )


def _points_close(a, b, tolerance) -> bool:
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def _cubicstr(cubic):
    return ", ".join(f"[{x}, {y}]" for x, y in cubic)


def compare_splines(actual, expected, tolerance=DEFAULT_TOLERANCE) -> Tuple[str, ...]:
    if len(actual) != len(expected):
        return (
            f"Expected spline of length {len(expected)}, but got {len(actual)}",
        )

    issues = []
    for i, (got, want) in enumerate(zip(actual, expected)):
        if all(_points_close(g, w, tolerance) for g, w in zip(got, want)):
            continue
        issues.append(
            f"Expected {i}th cubic to be {_cubicstr(want)}, but got {_cubicstr(got)}"
        )
    return tuple(issues)


def run_case(
    index: int,
    case: FixtureCase,
    fit: Callable = fit_cubics,
    tolerance: float = DEFAULT_TOLERANCE,
) -> FixtureResult:
    start = time.perf_counter()
    try:
        actual = tuple(fit(case.points, case.max_squared_error))
    except Exception as e:
        # recorded as ERRORED, the remaining cases still run
        return FixtureResult(index, case, None, time.perf_counter() - start, e, ())
    elapsed = time.perf_counter() - start
    issues = compare_splines(actual, case.expected, tolerance)
    return FixtureResult(index, case, actual, elapsed, None, issues)


def run_cases(
    cases: Sequence[FixtureCase],
    fit: Callable = fit_cubics,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Tuple[FixtureResult, ...]:
    return tuple(run_case(i, case, fit, tolerance) for i, case in enumerate(cases))


def _log_result(result: FixtureResult):
    ms = result.elapsed * 1000
    if result.outcome == Outcome.ERRORED:
        logging.error("case %d ERRORED in %.2fms: %r", result.index, ms, result.error)
    elif result.outcome == Outcome.FAILED:
        logging.warning("case %d FAILED in %.2fms", result.index, ms)
        for issue in result.issues:
            logging.warning("  %s", issue)
    else:
        logging.info("case %d passed in %.2fms", result.index, ms)


def write_svgs(results: Sequence[FixtureResult], svg_dir: Path):
    svg_dir.mkdir(parents=True, exist_ok=True)
    for result in results:
        svg_file = svg_dir / f"case_{result.index}.svg"
        tree = plot_fit(((result.case.points, result.actual or ()),))
        write_xml(str(svg_file), tree)


def main(argv):
    if len(argv) < 2:
        raise app.UsageError("Specify at least one fixture file")

    cases = [
        case_from_raw(raw) for fixture_file in argv[1:] for raw in load_fixtures(fixture_file)
    ]
    results = run_cases(cases, tolerance=FLAGS.fixture_tolerance)
    for result in results:
        _log_result(result)

    if FLAGS.svg_dir:
        write_svgs(results, Path(FLAGS.svg_dir))

    counts = {outcome: 0 for outcome in Outcome}
    for result in results:
        counts[result.outcome] += 1
    logging.info(
        "%d cases: %d passed, %d failed, %d errored",
        len(results),
        counts[Outcome.PASSED],
        counts[Outcome.FAILED],
        counts[Outcome.ERRORED],
    )
    return 0 if counts[Outcome.PASSED] == len(results) else 1


if __name__ == "__main__":
    app.run(main)
