"""
Fits a curve to a set of points taken from csv(s) of x,y pairs and outputs an svg of the result

Usage:
  python fit_curve_to_csv.py series1.csv series2.csv --max_sqr_err 0.5 --out_file fit.svg
"""
from absl import app
from absl import flags
from absl import logging
from gg_fit_curve import DEFAULT_MAX_ITERATIONS, fit_cubics
from helpers import read_csv, write_xml
from svg_plot import DEFAULT_VIEWPORT_SIZE, plot_fit


FLAGS = flags.FLAGS

flags.DEFINE_string("out_file", "-", "Output, - means stdout")
flags.DEFINE_float("max_sqr_err", 0.00001, "Max squared distance of a point from the fit")
flags.DEFINE_integer(
    "max_iterations",
    DEFAULT_MAX_ITERATIONS,
    "Max reparameterization passes before splitting a cubic",
)
flags.DEFINE_float("viewport_size", DEFAULT_VIEWPORT_SIZE, "Output viewBox width and height")


def fit_series(value_series, max_sqr_err, max_iterations=DEFAULT_MAX_ITERATIONS):
    result = []
    for series in value_series:
        cubics = fit_cubics(series, max_sqr_err, max_iterations=max_iterations)
        logging.info("fit_cubics max_sqr_err %s cubics %d", max_sqr_err, len(cubics))
        result.append((series, cubics))
    return result


def main(argv):
    if len(argv) < 2:
        raise app.UsageError("Specify at least one csv file")
    if FLAGS.max_iterations < 0:
        raise app.UsageError("--max_iterations must be >= 0")
    if FLAGS.max_sqr_err < 0:
        raise app.UsageError("--max_sqr_err must be >= 0")
    value_series = [read_csv(csv_file) for csv_file in argv[1:]]
    fits = fit_series(value_series, FLAGS.max_sqr_err, FLAGS.max_iterations)
    write_xml(FLAGS.out_file, plot_fit(fits, viewport_size=FLAGS.viewport_size))


if __name__ == "__main__":
    app.run(main)
