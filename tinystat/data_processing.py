"""
Loads measurement columns from delimited text files.
"""

# Files are header-less tables, one measurement per row. Only the selected
# column is kept; every cell in it must parse as a number.

import logging
import os

import numpy as np
import pandas as pd

DELIMITERS = {
    "tab": "\t",
    "space": " ",
    "comma": ",",
}


def load_measurements(filepath, column=0, delimiter="tab"):
    """Load one column of measurements from a delimited text file.

    Args:
        filepath (str): Path to the file.
        column (int): Zero-based index of the column to read.
        delimiter (str): One of ``"tab"``, ``"space"`` or ``"comma"``.

    Returns:
        numpy.ndarray: Measurements as a 1-D float array, in file order.

    Raises:
        ValueError: If the delimiter is unknown, the column does not exist, or
            a cell cannot be parsed as a number.
        OSError: If the file cannot be read.
    """
    sep = DELIMITERS.get(delimiter)
    if sep is None:
        raise ValueError(
            f"invalid delimiter: {delimiter!r} (expected one of {sorted(DELIMITERS)})"
        )
    if column < 0:
        raise ValueError(f"column must be >= 0, got {column}")

    try:
        df = pd.read_csv(
            filepath, sep=sep, header=None, dtype=str, skip_blank_lines=True
        )
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()

    if column >= df.shape[1]:
        raise ValueError(
            f"{filepath}: column {column} not found ({df.shape[1]} columns available)"
        )

    raw = df.iloc[:, column].str.strip()
    values = pd.to_numeric(raw, errors="coerce")
    bad = values.isna()
    if bad.any():
        row = int(np.flatnonzero(bad.to_numpy())[0])
        raise ValueError(
            f"{filepath}: row {row + 1} has non-numeric value {raw.iloc[row]!r}"
        )

    logging.debug("Loaded %d measurements from %s", len(values), filepath)
    return values.to_numpy(dtype=float)


def sample_label(filepath):
    """Return the display label for a measurement file (its base name)."""
    return os.path.basename(os.path.normpath(filepath))


def load_samples(filepaths, column=0, delimiter="tab"):
    """Load several measurement files, preserving their order.

    The first file is conventionally the control sample.

    Returns:
        dict[str, numpy.ndarray]: Mapping of file label to measurements.

    Raises:
        ValueError: If two files share a label, or on any load error.
    """
    samples = {}
    for path in filepaths:
        label = sample_label(path)
        if label in samples:
            raise ValueError(f"duplicate sample label: {label!r}")
        samples[label] = load_measurements(path, column=column, delimiter=delimiter)
    return samples
