import csv
import json
from lxml import etree


def read_csv(csv_file):
    with open(csv_file) as f:
        reader = csv.reader(f)
        rows = tuple(tuple(float(v) for v in row) for row in reader if row)
    return rows


def load_fixtures(fixture_file):
    # {"fit": [{"args": [points, max_sqr_err], "returns": cubics}, ...]}
    with open(fixture_file) as f:
        data = json.load(f)
    try:
        return data["fit"]
    except (KeyError, TypeError):
        raise ValueError(f"{fixture_file} has no 'fit' list")


def write_xml(out_file, tree, pretty=True):
    out_content = etree.tostring(tree, pretty_print=pretty).decode("utf-8")
    if out_file == "-":
        print(out_content)
    else:
        with open(out_file, "w") as f:
            f.write(out_content)
