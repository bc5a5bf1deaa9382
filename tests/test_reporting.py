import re

import pytest

from tinystat.reporting import (
    REPORT_COLUMNS,
    build_report_table,
    describe_difference,
    format_p_value,
    render_report,
)
from tinystat.stats import Summary, compare

IGUANA = Summary(n=7, mean=300.0, variance=238.047614**2)
CHAMELEON = Summary(n=5, mean=540.0, variance=299.081929**2)
LEOPARD = Summary(n=6, mean=643.5, variance=240.09**2)


def test_format_p_value():
    assert format_p_value(0.178) == ".178"
    assert format_p_value(0.02612) == ".026"
    assert format_p_value(0.0004) == "<.001"
    assert format_p_value(1.0) == "1.000"
    assert format_p_value(float("nan")) == "nan"


def test_describe_no_difference():
    d = compare(IGUANA, CHAMELEON, 95)
    assert describe_difference(IGUANA, CHAMELEON, d) == "no difference, p = .178"


def test_describe_significant_difference():
    d = compare(IGUANA, LEOPARD, 95)
    text = describe_difference(IGUANA, LEOPARD, d)
    assert re.fullmatch(r"643\.50 > 300\.00 ± 29\d\.\d\d, p = \.02\d", text)


def test_describe_direction_when_experiment_is_lower():
    d = compare(LEOPARD, IGUANA, 95)
    assert describe_difference(LEOPARD, IGUANA, d).startswith("300.00 < 643.50 ± ")


def test_build_report_table():
    summaries = {"iguana": IGUANA, "chameleon": CHAMELEON, "leopard": LEOPARD}
    differences = {
        "chameleon": compare(IGUANA, CHAMELEON, 95),
        "leopard": compare(IGUANA, LEOPARD, 95),
    }
    table = build_report_table(summaries, differences)

    assert list(table.columns) == REPORT_COLUMNS
    assert table["File"].tolist() == ["iguana", "chameleon", "leopard"]
    assert table["N"].tolist() == [7, 5, 6]
    assert table.loc[0, "Result"] == "(control)"
    assert table.loc[1, "Result"] == "(no difference, p = .178)"
    assert table.loc[0, "Stddev"] == pytest.approx(238.047614)


def test_build_report_table_requires_differences():
    with pytest.raises(KeyError):
        build_report_table({"a": IGUANA, "b": CHAMELEON}, {})
    with pytest.raises(ValueError):
        build_report_table({})


def test_render_report_layout():
    summaries = {"iguana": IGUANA, "chameleon": CHAMELEON}
    table = build_report_table(summaries, {"chameleon": compare(IGUANA, CHAMELEON, 95)})
    text = render_report(table)
    lines = text.splitlines()

    assert lines[0] == "File       N  Mean    Stddev"
    assert lines[1] == "iguana     7  300.00  238.05  (control)"
    assert lines[2] == "chameleon  5  540.00  299.08  (no difference, p = .178)"
    assert text.endswith("\n")
