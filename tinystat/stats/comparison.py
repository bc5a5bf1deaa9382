"""Compare two sample summaries with a two-sample t-test.

Two variants are available:

- ``"welch"`` (default): unequal variances, Welch-Satterthwaite degrees of
  freedom. Its Type I error rate holds up when sample sizes or variances
  differ sharply.
- ``"student"``: pooled variance with ``na + nb - 2`` degrees of freedom.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..errors import DegenerateSample, InvalidParameter
from .distributions import normal_cdf, normal_isf, student_t_cdf, student_t_isf
from .summary import Summary

VARIANTS = ("welch", "student")


@dataclass(frozen=True)
class Difference:
    """Statistical difference between a control and an experimental sample.

    Attributes:
        effect: Absolute difference of the two means.
        critical_value: Largest effect consistent with no real difference at
            the requested confidence.
        effect_size: Effect divided by the spread of the two samples.
        p_value: Two-tailed probability of an effect at least this large under
            the null hypothesis.
        alpha: Significance level, ``1 - confidence / 100``.
        beta: ``Phi(z - z_alpha) - Phi(-z - z_alpha)`` for the normal
            approximation of the standardized effect.
        degrees_of_freedom: Degrees of freedom of the t distribution used.
        std_error: Standard error of the difference of the means.
        t_statistic: Observed ``effect / std_error``.
        variant: ``"welch"`` or ``"student"``.
    """

    effect: float
    critical_value: float
    effect_size: float
    p_value: float
    alpha: float
    beta: float
    degrees_of_freedom: float
    std_error: float
    t_statistic: float
    variant: str = "welch"

    @property
    def significant(self) -> bool:
        return self.effect > self.critical_value


def _validate(control: Summary, experiment: Summary, confidence: float, variant: str) -> None:
    if variant not in VARIANTS:
        raise InvalidParameter(f"variant must be one of {VARIANTS}, got {variant!r}")
    if not 0.0 < confidence < 100.0:
        raise InvalidParameter(f"confidence must be in (0, 100), got {confidence!r}")
    for label, summary in (("control", control), ("experiment", experiment)):
        if summary.n < 2:
            raise DegenerateSample(
                f"The {label} sample needs at least 2 measurements, got n={summary.n}."
            )


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, treating 0/0 as 0 and x/0 as infinity."""
    if denominator > 0:
        return numerator / denominator
    return 0.0 if numerator == 0 else math.inf


def compare(
    control: Summary,
    experiment: Summary,
    confidence: float,
    variant: str = "welch",
) -> Difference:
    """Test whether two samples differ at the given confidence level.

    Args:
        control (Summary): Summary of the control sample (``n >= 2``).
        experiment (Summary): Summary of the experimental sample (``n >= 2``).
        confidence (float): Confidence level in percent, in ``(0, 100)``.
        variant (str, optional): ``"welch"`` (default) or ``"student"``.

    Returns:
        Difference: Effect, critical value, p-value, effect size and power
        term. ``Difference.significant`` agrees with ``p_value < alpha``.

    Raises:
        InvalidParameter: If ``confidence`` or ``variant`` is invalid.
        DegenerateSample: If either sample has fewer than 2 measurements.

    Note:
        The result is symmetric in ``(control, experiment)``. When both
        samples have zero spread, any non-zero effect is significant with
        ``p_value == 0``.

    References:
        Welch, B. L. (1947). The generalization of "Student's" problem when
        several different population variances are involved. Biometrika 34.
    """
    confidence = float(confidence)
    _validate(control, experiment, confidence, variant)

    na, nb = float(control.n), float(experiment.n)
    va, vb = control.variance, experiment.variance
    # stays positive for confidence just below 100
    alpha = (100.0 - confidence) / 100.0

    if variant == "welch":
        ea, eb = va / na, vb / nb
        se = math.sqrt(ea + eb)
        if se > 0:
            # variance shares, each in [0, 1]
            wa, wb = ea / (ea + eb), eb / (ea + eb)
            nu = 1.0 / (wa * wa / (na - 1.0) + wb * wb / (nb - 1.0))
        else:
            nu = na + nb - 2.0
        spread = math.sqrt((va + vb) / 2.0)
    else:
        nu = na + nb - 2.0
        spread = math.sqrt(((na - 1.0) * va + (nb - 1.0) * vb) / nu)
        se = spread * math.sqrt(1.0 / na + 1.0 / nb)

    effect = abs(control.mean - experiment.mean)
    t_critical = student_t_isf(alpha / 2.0, nu)
    t_observed = _ratio(effect, se)

    if t_observed == 0:
        p_value = 1.0
    else:
        p_value = min(1.0, 2.0 * student_t_cdf(-t_observed, nu))

    z = _ratio(effect, spread * math.sqrt(1.0 / na + 1.0 / nb))
    z_alpha = normal_isf(alpha / 2.0)
    beta = normal_cdf(z - z_alpha) - normal_cdf(-z - z_alpha)

    difference = Difference(
        effect=effect,
        critical_value=t_critical * se,
        effect_size=_ratio(effect, spread),
        p_value=p_value,
        alpha=alpha,
        beta=beta,
        degrees_of_freedom=nu,
        std_error=se,
        t_statistic=t_observed,
        variant=variant,
    )
    logging.debug(
        "%s t-test: effect=%.6g critical=%.6g nu=%.4g p=%.4g",
        variant,
        difference.effect,
        difference.critical_value,
        nu,
        p_value,
    )
    return difference
