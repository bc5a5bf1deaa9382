"""Render box-and-whisker figures of measurement samples.

Plotting functions receive raw samples and their comparisons and only draw
them; no statistics beyond quartiles are computed here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from .stats import Difference

FIGURE_DPI = 300
CONTROL_COLOR = "#4A4A4A"
SIGNIFICANT_COLOR = "#a50f15"
NEUTRAL_COLOR = "#004371"

_STYLE_STATE = {"initialized": False}


def setup_plot_style() -> None:
    """Apply the plotting style once per process.

    Returns:
        None: Update global matplotlib ``rcParams`` in-place.
    """
    if _STYLE_STATE["initialized"]:
        return
    plt.rcParams.update(
        {
            "font.family": "serif",
            "font.size": 11,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "axes.linewidth": 0.8,
            "savefig.dpi": FIGURE_DPI,
        }
    )
    _STYLE_STATE["initialized"] = True


def save_figure(fig: Figure, path: str | Path) -> str:
    """Save a figure, creating the parent directory if needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(target), dpi=FIGURE_DPI, bbox_inches="tight", pad_inches=0.12)
    return str(target)


def plot_box_summary(
    samples: Mapping[str, np.ndarray],
    output_path: str | Path,
    differences: Optional[Mapping[str, Difference]] = None,
    title: Optional[str] = None,
) -> str:
    """Draw one box-and-whisker per sample and save the figure.

    Args:
        samples (Mapping[str, numpy.ndarray]): Ordered mapping of label to
            measurements; the first entry is the control.
        output_path (str | Path): Destination image path; the format follows
            the file extension.
        differences (Mapping[str, Difference], optional): Comparison of each
            experimental label against the control. Significantly different
            samples are drawn in a highlight color.
        title (str, optional): Figure title.

    Returns:
        str: Path of the saved figure.

    Raises:
        ValueError: If ``samples`` is empty or any sample has no measurements.

    Note:
        Boxes span the interquartile range with the median as a line; the
        mean is marked with ``*``, whiskers extend to the sample extremes.
    """
    if not samples:
        raise ValueError("At least one sample is required to plot.")
    labels = list(samples)
    data = [np.asarray(samples[label], dtype=float) for label in labels]
    for label, values in zip(labels, data):
        if values.size == 0:
            raise ValueError(f"Sample {label!r} has no measurements.")
    differences = differences or {}

    setup_plot_style()
    fig, ax = plt.subplots(figsize=(max(4.0, 1.6 * len(labels) + 1.5), 4.0))
    try:
        boxes = ax.boxplot(
            data,
            whis=(0, 100),
            patch_artist=True,
            widths=0.5,
            medianprops={"color": "black", "linewidth": 1.0},
        )
        ax.set_xticks(range(1, len(labels) + 1))
        ax.set_xticklabels(labels)
        for i, (label, patch) in enumerate(zip(labels, boxes["boxes"])):
            if i == 0:
                color = CONTROL_COLOR
            elif label in differences and differences[label].significant:
                color = SIGNIFICANT_COLOR
            else:
                color = NEUTRAL_COLOR
            patch.set_facecolor("white")
            patch.set_edgecolor(color)

        means = [float(np.mean(values)) for values in data]
        ax.scatter(
            range(1, len(labels) + 1),
            means,
            marker="*",
            color="black",
            zorder=3,
            label="mean",
        )
        ax.set_ylabel("Measurement")
        if title:
            ax.set_title(title)
        ax.legend(loc="best", frameon=False)
        return save_figure(fig, output_path)
    finally:
        plt.close(fig)
