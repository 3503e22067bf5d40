"""Exception types raised by the quasi-Newton optimizer."""

from __future__ import annotations


class OptimizationError(Exception):
    """Base class for all optimizer failures."""


class ConfigurationError(OptimizationError, ValueError):
    """Missing or out-of-range optimizer input (objective, start, step)."""


class DimensionError(OptimizationError, ValueError):
    """Vectors and matrices of one run do not share a dimension."""


class NumericalError(OptimizationError, ArithmeticError):
    """A computation produced NaN or hit a degenerate configuration."""


__all__ = [
    "ConfigurationError",
    "DimensionError",
    "NumericalError",
    "OptimizationError",
]
