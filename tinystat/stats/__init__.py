"""
Statistical core of tinystat.

This subpackage provides the numerical routines for comparing two samples.
All functions operate on primitive types and return immutable value objects;
no file or report handling is included.

Modules:
    distributions:
        Regularized incomplete beta function, Student's t CDF and quantile,
        the standard normal CDF and quantile, and their upper-tail inverses.

    summary:
        Welford single-pass summaries (count, mean, sample variance).

    comparison:
        Welch's (default) or Student's two-sample t-test producing a
        ``Difference`` with critical value, p-value, effect size and power.

Design Principle:
    This subpackage has no dependencies on data loading, reporting or
    plotting modules. It can be tested and reused independently.
"""

from .comparison import VARIANTS, Difference, compare
from .distributions import (
    normal_cdf,
    normal_isf,
    normal_quantile,
    regularized_incomplete_beta,
    student_t_cdf,
    student_t_isf,
    student_t_quantile,
)
from .summary import Summary, summarize

__all__ = [
    "Difference",
    "Summary",
    "VARIANTS",
    "compare",
    "summarize",
    "normal_cdf",
    "normal_isf",
    "normal_quantile",
    "regularized_incomplete_beta",
    "student_t_cdf",
    "student_t_isf",
    "student_t_quantile",
]
