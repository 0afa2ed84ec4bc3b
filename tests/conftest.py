from absl import flags


def pytest_configure(config):
    # Tools read FLAGS in main(); tests drive main() without app.run
    flags.FLAGS.mark_as_parsed()
