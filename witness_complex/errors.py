# witness_complex/errors.py
from __future__ import annotations

__all__ = [
    "WitnessComplexError",
    "AmbientDimensionMismatch",
    "InvalidThreshold",
    "EmptyLandmarkSetWarning",
]


class WitnessComplexError(ValueError):
    """Base class for input errors raised by witness complex construction."""


class AmbientDimensionMismatch(WitnessComplexError):
    """Witnesses and landmarks do not share one coordinate count."""


class InvalidThreshold(WitnessComplexError):
    """Negative (or NaN) squared alpha, or an invalid dimension limit."""


class EmptyLandmarkSetWarning(UserWarning):
    """No landmarks were given; the resulting complex is empty."""
