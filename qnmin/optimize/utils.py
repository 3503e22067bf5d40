"""Small NumPy helpers for vector coercion and matrix checks."""

from __future__ import annotations

import numpy as np

from .core import Array
from .errors import DimensionError


def as_vector(x: Array) -> Array:
    """Return ``x`` as a 1-D float array (copy only if needed)."""
    return np.asarray(x, dtype=float)


def check_dimensions(mat: Array, *vectors: Array) -> int:
    """Return the common dimension of a square matrix and vectors.

    Raises
    ------
    DimensionError
        If ``mat`` is not square or any vector is not 1-D of matching size.
    """
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise DimensionError(f"Expected a square matrix, got shape {mat.shape}.")
    dim = mat.shape[0]
    for vec in vectors:
        if vec.ndim != 1 or vec.size != dim:
            raise DimensionError(
                f"Dimension mismatch: matrix is {dim}x{dim}, vector has shape {vec.shape}."
            )
    return dim


def is_symmetric(mat: Array, atol: float = 1e-12) -> bool:
    """Check whether a square matrix equals its transpose within ``atol``."""
    return bool(np.allclose(mat, mat.T, rtol=0.0, atol=atol))


def is_pos_def(mat: Array, tol: float = 1e-12) -> bool:
    """Check if a matrix is positive definite via eigenvalues."""
    sym = 0.5 * (mat + mat.T)
    eigvals = np.linalg.eigvalsh(sym)
    return bool(np.all(eigvals > tol))


__all__ = ["as_vector", "check_dimensions", "is_pos_def", "is_symmetric"]
