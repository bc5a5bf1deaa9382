"""
A Python package for comparing repeated measurements against a control.

Determines whether experimental samples (e.g. benchmark run times) differ from
a control sample by more than random noise explains, using Welch's or
Student's two-sample t-test.

Modules:
    - stats: Summaries, the t-test and the distribution functions it needs.
    - data_processing: Loads measurement columns from delimited text files.
    - reporting: Formats summaries and differences into a result table.
    - plotting: Draws box-and-whisker figures of the samples.
    - cli: Command-line entry point.
"""

__version__ = "1.0.0"

from .errors import (
    DegenerateSample,
    InsufficientData,
    InvalidParameter,
    NonConvergence,
    TinystatError,
)
from .stats import Difference, Summary, compare, summarize

__all__ = [
    # Core
    "summarize",
    "compare",
    "Summary",
    "Difference",
    # Errors
    "TinystatError",
    "InsufficientData",
    "DegenerateSample",
    "InvalidParameter",
    "NonConvergence",
]
