"""Exception types raised by tinystat."""

from __future__ import annotations


class TinystatError(Exception):
    """Base class for errors raised deliberately by tinystat."""


class InsufficientData(TinystatError, ValueError):
    """A sample has too few measurements for the requested statistic."""


class DegenerateSample(InsufficientData):
    """A sample cannot support degrees of freedom (fewer than two points)."""


class InvalidParameter(TinystatError, ValueError):
    """A confidence level or distribution parameter is outside its domain."""


class NonConvergence(TinystatError, ArithmeticError):
    """A bounded iterative routine exhausted its iteration budget."""
