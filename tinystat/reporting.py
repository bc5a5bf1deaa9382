"""Format sample summaries and t-test results into a report table.

This module is the presentation boundary: it receives ``Summary`` and
``Difference`` objects and produces strings and DataFrames only.
"""

from __future__ import annotations

from typing import Mapping, Optional

import numpy as np
import pandas as pd

from .stats import Difference, Summary

REPORT_COLUMNS = ["File", "N", "Mean", "Stddev", "Result"]


def format_p_value(p_value: float) -> str:
    """Format a p-value APA-style: three decimals and no leading zero.

    Examples: ``0.178 -> ".178"``, ``0.0004 -> "<.001"``, ``1.0 -> "1.000"``.
    """
    p = float(p_value)
    if not np.isfinite(p):
        return "nan"
    if p < 0.001:
        return "<.001"
    text = f"{p:.3f}"
    if text.startswith("0"):
        text = text[1:]
    return text


def describe_difference(
    control: Summary, experiment: Summary, difference: Difference
) -> str:
    """Describe one comparison in a short human-readable phrase.

    Args:
        control (Summary): Control sample summary.
        experiment (Summary): Experimental sample summary.
        difference (Difference): Result of ``compare(control, experiment, ...)``.

    Returns:
        str: ``"no difference, p = .178"`` when not significant, otherwise
        ``"643.50 > 300.00 ± 293.97, p = .026"`` (experiment mean, direction,
        control mean and critical value).
    """
    p_text = format_p_value(difference.p_value)
    p_part = f"p = {p_text}" if not p_text.startswith("<") else f"p {p_text}"
    if not difference.significant:
        return f"no difference, {p_part}"

    op = ">" if experiment.mean > control.mean else "<"
    return (
        f"{experiment.mean:.2f} {op} {control.mean:.2f} "
        f"± {difference.critical_value:.2f}, {p_part}"
    )


def build_report_table(
    summaries: Mapping[str, Summary],
    differences: Optional[Mapping[str, Difference]] = None,
) -> pd.DataFrame:
    """Build the result table, control first.

    Args:
        summaries (Mapping[str, Summary]): Ordered mapping of sample label to
            summary; the first entry is the control.
        differences (Mapping[str, Difference], optional): Comparison of each
            experimental label against the control.

    Returns:
        pandas.DataFrame: Columns ``File``, ``N``, ``Mean``, ``Stddev`` and
        ``Result``.

    Raises:
        ValueError: If ``summaries`` is empty.
        KeyError: If an experimental sample has no entry in ``differences``.
    """
    if not summaries:
        raise ValueError("At least one (control) summary is required.")
    differences = differences or {}

    labels = list(summaries)
    control = summaries[labels[0]]
    rows = []
    for i, label in enumerate(labels):
        summary = summaries[label]
        if i == 0:
            result = "control"
        else:
            if label not in differences:
                raise KeyError(f"No comparison available for sample {label!r}")
            result = describe_difference(control, summary, differences[label])
        rows.append(
            {
                "File": label,
                "N": int(summary.n),
                "Mean": float(summary.mean),
                "Stddev": float(summary.std_dev),
                "Result": f"({result})",
            }
        )
    return pd.DataFrame.from_records(rows, columns=REPORT_COLUMNS)


def render_report(table: pd.DataFrame) -> str:
    """Render a report table as left-aligned fixed-width text."""
    formatted = table.copy()
    formatted["Mean"] = formatted["Mean"].map(lambda v: f"{v:.2f}")
    formatted["Stddev"] = formatted["Stddev"].map(lambda v: f"{v:.2f}")
    formatted["N"] = formatted["N"].astype(str)

    widths = {
        col: max(len(col), *(len(str(v)) for v in formatted[col]))
        for col in REPORT_COLUMNS[:-1]
    }
    lines = ["  ".join(col.ljust(widths[col]) for col in REPORT_COLUMNS[:-1]).rstrip()]
    for _, row in formatted.iterrows():
        cells = [str(row[col]).ljust(widths[col]) for col in REPORT_COLUMNS[:-1]]
        cells.append(str(row["Result"]))
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines) + "\n"
