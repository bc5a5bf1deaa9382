import numpy as np
import pytest

from tinystat.data_processing import load_measurements, load_samples, sample_label


def test_load_tab_delimited_first_column(write_sample):
    path = write_sample("iguana", "50\t1\n100\t2\n\n150\t3\n")
    values = load_measurements(path)
    np.testing.assert_array_equal(values, [50.0, 100.0, 150.0])
    assert values.dtype == np.float64


def test_load_selected_column_with_space_delimiter(write_sample):
    path = write_sample("runs.txt", "a 1.5\nb 2.5\nc -3e2\n")
    values = load_measurements(path, column=1, delimiter="space")
    np.testing.assert_allclose(values, [1.5, 2.5, -300.0])


def test_load_comma_delimited(write_sample):
    path = write_sample("runs.csv", "1,10\n2,20\n")
    np.testing.assert_array_equal(
        load_measurements(path, column=1, delimiter="comma"), [10.0, 20.0]
    )


def test_non_numeric_cell_reports_row(write_sample):
    path = write_sample("bad", "1\nfast\n3\n")
    with pytest.raises(ValueError, match="row 2"):
        load_measurements(path)


def test_missing_column_raises(write_sample):
    path = write_sample("one-col", "1\n2\n")
    with pytest.raises(ValueError, match="column 3"):
        load_measurements(path, column=3)


def test_invalid_delimiter_raises(write_sample):
    path = write_sample("x", "1\n")
    with pytest.raises(ValueError, match="invalid delimiter"):
        load_measurements(path, delimiter="pipe")


def test_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        load_measurements(str(tmp_path / "nope"))


def test_load_samples_keeps_order_and_labels(write_sample):
    control = write_sample("control", "1\n2\n3\n")
    experiment = write_sample("experiment", "4\n5\n")
    samples = load_samples([control, experiment])
    assert list(samples) == ["control", "experiment"]
    np.testing.assert_array_equal(samples["experiment"], [4.0, 5.0])
    assert sample_label(control) == "control"


def test_load_samples_rejects_duplicate_labels(write_sample):
    path = write_sample("same", "1\n2\n")
    with pytest.raises(ValueError, match="duplicate"):
        load_samples([path, path])
