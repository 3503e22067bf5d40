"""BFGS rank-2 update of an inverse Hessian approximation."""

from __future__ import annotations

import numpy as np

from ..logging import get_logger
from .core import Array
from .errors import NumericalError
from .utils import as_vector, check_dimensions

logger = get_logger(__name__)


def bfgs_update(
    inv_hessian: Array, y: Array, dx: Array, curvature_tol: float = 1e-12
) -> Array:
    """Apply the BFGS update to ``inv_hessian`` in place and return it.

    With ``t = N y``, ``a = dx . y``, ``b = y . t``, ``c = 1/a`` and
    ``d = (1 + b/a) c``::

        N <- N + d dx dx^T - c (dx t^T + t dx^T)

    Symmetry is preserved exactly. Positive definiteness is preserved only
    when the curvature condition ``dx . y > 0`` holds.

    Raises
    ------
    DimensionError
        If ``inv_hessian``, ``y`` and ``dx`` do not share one dimension.
    NumericalError
        If ``|dx . y| <= curvature_tol * |dx| * |y|`` or the update is not
        finite.
    """
    y = as_vector(y)
    dx = as_vector(dx)
    check_dimensions(inv_hessian, y, dx)

    t1 = inv_hessian @ y
    a = float(np.dot(dx, y))
    if abs(a) <= curvature_tol * np.linalg.norm(dx) * np.linalg.norm(y):
        raise NumericalError(
            f"BFGS update undefined: step and gradient change are nearly orthogonal "
            f"(dx.y = {a})."
        )
    if a < 0:
        logger.warning(
            "Curvature condition violated (dx.y = %g); inverse Hessian may lose "
            "positive definiteness.",
            a,
        )
    b = float(np.dot(y, t1))
    c = 1.0 / a
    d = (1 + b / a) * c

    cross = np.outer(dx, t1)
    cross = cross + cross.T
    update = d * np.outer(dx, dx) - c * cross
    if not np.all(np.isfinite(update)):
        raise NumericalError(f"BFGS update is not finite (dx.y = {a}).")
    inv_hessian += update
    return inv_hessian


__all__ = ["bfgs_update"]
