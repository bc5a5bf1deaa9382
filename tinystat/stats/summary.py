"""Single-pass sample summaries (count, mean, variance)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..errors import InsufficientData, InvalidParameter


@dataclass(frozen=True)
class Summary:
    """Statistical summary of an approximately normal sample.

    Attributes:
        n: Number of measurements (>= 1).
        mean: Arithmetic mean of the measurements.
        variance: Bessel-corrected sample variance; ``0.0`` when ``n == 1``.
    """

    n: int
    mean: float
    variance: float

    def __post_init__(self) -> None:
        if not self.n >= 1:
            raise InvalidParameter(f"n must be >= 1, got {self.n!r}")
        if not math.isfinite(self.mean):
            raise InvalidParameter(f"mean must be finite, got {self.mean!r}")
        if not (self.variance >= 0 and math.isfinite(self.variance)):
            raise InvalidParameter(
                f"variance must be finite and >= 0, got {self.variance!r}"
            )

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def std_err(self) -> float:
        return self.std_dev / math.sqrt(self.n)


def summarize(data: Iterable[float]) -> Summary:
    """Summarize a sample with Welford's online mean/variance update.

    Args:
        data (Iterable[float]): Measurements; any sequence or 1-D array.

    Returns:
        Summary: Count, mean and sample variance of ``data``.

    Raises:
        InsufficientData: If ``data`` is empty.
        InvalidParameter: If any measurement is NaN or infinite.

    Note:
        The update avoids the catastrophic cancellation of the sum-of-squares
        formula for data with a large offset and a small spread.

    References:
        Welford, B. P. (1962). Note on a method for calculating corrected sums
        of squares and products. Technometrics 4(3), 419-420.
    """
    if not isinstance(data, np.ndarray):
        data = list(data)
    values = np.asarray(data, dtype=float).ravel()
    if values.size < 1:
        raise InsufficientData("Cannot summarize an empty sample.")
    if not np.all(np.isfinite(values)):
        raise InvalidParameter("Sample contains NaN or infinite measurements.")

    mean = 0.0
    m2 = 0.0
    for i, x in enumerate(values.tolist(), start=1):
        delta = x - mean
        mean += delta / i
        m2 += delta * (x - mean)

    n = int(values.size)
    variance = m2 / (n - 1) if n > 1 else 0.0
    return Summary(n=n, mean=float(mean), variance=float(max(variance, 0.0)))
