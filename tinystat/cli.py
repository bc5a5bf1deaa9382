"""
Command-line interface: compare experiment files against a control file.

Usage:
    tinystat [OPTIONS] <CONTROL> [EXP1 EXP2 EXP3...]
"""

# Pipeline overview:
# 1) Load one measurement column from each file (first file is the control).
# 2) Summarize each sample with Welford's single-pass update.
# 3) Compare every experiment against the control with the selected t-test.
# 4) Print the result table and, optionally, save a box-plot figure.

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .data_processing import DELIMITERS, load_samples
from .errors import TinystatError
from .plotting import plot_box_summary
from .reporting import build_report_table, render_report
from .stats import VARIANTS, compare, summarize


@dataclass(frozen=True)
class RunConfig:
    """Settings for one invocation, collected from the command line."""

    files: Tuple[str, ...]
    confidence: float = 95.0
    column: int = 0
    delimiter: str = "tab"
    variant: str = "welch"
    plot_path: Optional[str] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinystat",
        description="tinystat helps you conduct experiments.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="control file followed by zero or more experiment files",
    )
    parser.add_argument(
        "--confidence", type=float, default=95.0, help="confidence level in percent"
    )
    parser.add_argument(
        "--column", type=int, default=0, help="the column of data to analyze"
    )
    parser.add_argument(
        "--delimiter",
        choices=sorted(DELIMITERS),
        default="tab",
        help="the column delimiter",
    )
    parser.add_argument(
        "--variant",
        choices=VARIANTS,
        default="welch",
        help="t-test variant: welch (unequal variances) or student (pooled)",
    )
    parser.add_argument(
        "--plot", dest="plot_path", default=None, help="save a box plot to this path"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (logs go to stderr)",
    )
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> tuple[RunConfig, str]:
    """Parse command-line arguments into a ``RunConfig`` and a log level."""
    args = build_parser().parse_args(argv)
    config = RunConfig(
        files=tuple(args.files),
        confidence=args.confidence,
        column=args.column,
        delimiter=args.delimiter,
        variant=args.variant,
        plot_path=args.plot_path,
    )
    return config, args.log_level


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def run(config: RunConfig) -> str:
    """Load, summarize and compare the configured files.

    Returns:
        str: The rendered report.

    Raises:
        TinystatError: On degenerate samples or invalid parameters.
        ValueError: On unreadable measurement files.
        OSError: If a file cannot be opened.
    """
    start_time = time.time()
    samples = load_samples(
        config.files, column=config.column, delimiter=config.delimiter
    )
    logging.info("Loaded %d samples", len(samples))

    summaries = {label: summarize(values) for label, values in samples.items()}
    labels = list(summaries)
    control = summaries[labels[0]]

    differences = {}
    for label in labels[1:]:
        differences[label] = compare(
            control, summaries[label], config.confidence, variant=config.variant
        )
        logging.info(
            "%s vs %s: p=%.4g significant=%s",
            labels[0],
            label,
            differences[label].p_value,
            differences[label].significant,
        )

    table = build_report_table(summaries, differences)

    if config.plot_path:
        path = plot_box_summary(samples, config.plot_path, differences)
        logging.info("Saved box plot to %s", path)

    logging.info("Comparison completed in %.2f seconds", time.time() - start_time)
    return render_report(table)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    config, log_level = parse_config(argv)
    configure_logging(log_level)

    try:
        report = run(config)
    except (TinystatError, ValueError, ArithmeticError, OSError) as exc:
        logging.error("%s", exc)
        return 1

    sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
