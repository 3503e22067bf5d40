"""Central-difference gradient estimation."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .core import Array, ObjectiveFunction
from .errors import ConfigurationError, DimensionError, NumericalError
from .utils import as_vector


def estimate_gradient(
    point: Array,
    h: float,
    func: ObjectiveFunction,
    out: Optional[Array] = None,
) -> tuple[Array, float]:
    """Compute a central-difference gradient and its 2-norm.

    Parameters
    ----------
    point:
        Evaluation point. It is never modified; perturbations are applied to
        a private copy.
    h:
        Perturbation size for the central difference.
    func:
        Objective returning a scalar given a point.
    out:
        Optional buffer receiving the gradient. Must have the point's size.

    Returns
    -------
    tuple[np.ndarray, float]
        The gradient (``out`` when given) and its 2-norm. The norm is
        accumulated with ``hypot`` so large or tiny components neither
        overflow nor underflow.

    Raises
    ------
    ConfigurationError
        If ``h`` is not a positive finite number.
    NumericalError
        If the gradient contains NaN, e.g. ``func`` returned NaN.
    """
    if not (math.isfinite(h) and h > 0):
        raise ConfigurationError(f"Gradient step must be positive and finite, got {h}.")
    point = as_vector(point)
    if out is None:
        out = np.zeros_like(point)
    elif out.shape != point.shape:
        raise DimensionError(
            f"Gradient buffer has shape {out.shape}, point has shape {point.shape}."
        )

    scratch = point.copy()
    norm = 0.0
    for i in range(point.size):
        xi = scratch[i]
        scratch[i] = xi - h
        f_minus = func(scratch)
        scratch[i] = xi + h
        f_plus = func(scratch)
        scratch[i] = xi
        grad_i = (f_plus - f_minus) / (2 * h)
        norm = math.hypot(norm, grad_i)
        out[i] = grad_i

    if math.isnan(norm) or np.isnan(out).any():
        raise NumericalError("2-norm of gradient is NaN.")
    return out, norm


__all__ = ["estimate_gradient"]
