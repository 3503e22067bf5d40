"""Parabolic-fit line search along a fixed direction."""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

from ..logging import get_logger
from .core import MIN_TOL, Array, ObjectiveFunction
from .errors import DimensionError, NumericalError
from .utils import as_vector

logger = get_logger(__name__)

# Refinement always runs at least this many boundary shrinks.
MIN_FIT_PASSES = 2


def fit_parabola(
    a1: float, a2: float, a3: float, f1: float, f2: float, f3: float
) -> float:
    """Return the abscissa of the vertex of the parabola through three samples.

    Raises
    ------
    NumericalError
        If the samples are collinear (no unique vertex) or the vertex is not
        finite.
    """
    a23 = a2 - a3
    a31 = a3 - a1
    a12 = a1 - a2
    a23sq = a2 * a2 - a3 * a3
    a31sq = a3 * a3 - a1 * a1
    a12sq = a1 * a1 - a2 * a2

    den = 2 * (f1 * a23 + f2 * a31 + f3 * a12)
    if den == 0:
        raise NumericalError(
            f"Degenerate parabola fit through steps ({a1}, {a2}, {a3})."
        )
    num = f1 * a23sq + f2 * a31sq + f3 * a12sq
    vertex = num / den
    if not math.isfinite(vertex):
        raise NumericalError(f"Parabola fit produced a non-finite minimizer {vertex}.")
    return vertex


def _shrink_boundary(
    phi: Callable[[float], float],
    a_mid: float,
    f_mid: float,
    a_outer: float,
    max_subdivisions: int,
) -> tuple[float, float]:
    """Pull an outer bracket point toward the middle without losing the minimum.

    Candidates ``a_mid + (a_outer - a_mid) * (k - 1) / k`` for k = 2, 3, ...
    are tried until one is no lower than the middle sample.
    """
    for k in range(2, max_subdivisions + 2):
        a_new = a_mid + ((a_outer - a_mid) * (k - 1) / k)
        f_new = phi(a_new)
        if not f_mid > f_new:
            return a_new, f_new
    raise NumericalError(
        f"Could not shrink bracket boundary {a_outer} within {max_subdivisions} subdivisions."
    )


def parabolic_line_search(
    base: Array,
    direction: Array,
    func: ObjectiveFunction,
    initial_step: float = 2.2e-16,
    out: Optional[Array] = None,
    max_subdivisions: int = 1000,
    max_refinements: int = 200,
) -> Array:
    """Minimize ``func`` along ``direction`` starting from ``base``.

    The step is doubled from ``initial_step`` until the last three samples
    bracket a minimum, a parabola is fitted through them, and the bracket is
    then tightened and refitted until two consecutive vertices agree to
    within ``MIN_TOL``.

    Parameters
    ----------
    base:
        Starting point; not modified.
    direction:
        Search direction; normalized internally, not modified.
    func:
        Objective returning a scalar given a point.
    initial_step:
        First trial step length along the unit direction.
    out:
        Optional buffer receiving the minimizing point.
    max_subdivisions:
        Cap on boundary candidates tried per refinement pass.
    max_refinements:
        Cap on refinement passes.

    Returns
    -------
    np.ndarray
        ``base + alpha * s`` for the fitted step ``alpha`` and unit
        direction ``s`` (``out`` when given).

    Raises
    ------
    NumericalError
        On a zero direction, an objective unbounded along the line, a
        degenerate parabola fit, or when a refinement cap is exceeded.
    """
    base = as_vector(base)
    s = np.array(direction, dtype=float)
    if s.shape != base.shape:
        raise DimensionError(
            f"Direction has shape {s.shape}, base point has shape {base.shape}."
        )
    length = float(np.linalg.norm(s))
    if not (math.isfinite(length) and length > 0):
        raise NumericalError(f"Search direction has invalid length {length}.")
    s /= length

    trial = np.empty_like(base)

    def phi(alpha: float) -> float:
        np.multiply(s, alpha, out=trial)
        np.add(trial, base, out=trial)
        return func(trial)

    # Keep doubling while the newest sample is still lower than the previous.
    alphas = [0.0, 0.0, 0.0]
    fs = [0.0, 0.0, 0.0]
    j = 0
    alpha = float(initial_step)
    while j < 3 or fs[(j - 2) % 3] - fs[(j - 1) % 3] > 0:
        if math.isinf(alpha):
            raise NumericalError("No bracket found; objective may be unbounded below.")
        fs[j % 3] = phi(alpha)
        alphas[j % 3] = alpha
        alpha *= 2
        j += 1

    a1, f1 = alphas[j % 3], fs[j % 3]
    a2, f2 = alphas[(j + 1) % 3], fs[(j + 1) % 3]
    a3, f3 = alphas[(j - 1) % 3], fs[(j - 1) % 3]
    logger.debug("Bracket after %d samples: steps (%g, %g, %g)", j, a1, a2, a3)

    a_min0 = math.inf
    a_min1 = fit_parabola(a1, a2, a3, f1, f2, f3)
    passes = 0
    while passes < MIN_FIT_PASSES or abs(a_min1 - a_min0) > MIN_TOL:
        if passes >= max_refinements:
            raise NumericalError(
                f"Parabolic fit did not settle within {max_refinements} refinements."
            )
        passes += 1
        if f3 - f2 > f1 - f2:
            a3, f3 = _shrink_boundary(phi, a2, f2, a3, max_subdivisions)
        else:
            a1, f1 = _shrink_boundary(phi, a2, f2, a1, max_subdivisions)
        a_min0 = a_min1
        a_min1 = fit_parabola(a1, a2, a3, f1, f2, f3)
        logger.debug("Refinement %d: fitted step %.17g", passes, a_min1)

    if out is None:
        out = np.empty_like(base)
    np.multiply(s, a_min1, out=trial)
    trial += base
    np.copyto(out, trial)
    return out


__all__ = ["fit_parabola", "parabolic_line_search"]
