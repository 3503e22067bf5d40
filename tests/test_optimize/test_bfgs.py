import logging
from io import StringIO

import numpy as np
import pytest

from qnmin.logging import configure_logging
from qnmin.optimize import DimensionError, NumericalError, bfgs_update, is_pos_def


def random_spd(rng: np.random.Generator, dim: int) -> np.ndarray:
    a = rng.standard_normal((dim, dim))
    return a @ a.T + dim * np.eye(dim)


def curvature_pair(
    rng: np.random.Generator, dim: int
) -> tuple[np.ndarray, np.ndarray]:
    """Return (y, dx) from a quadratic with SPD Hessian so that dx.y > 0."""
    hess = random_spd(rng, dim)
    dx = rng.standard_normal(dim)
    return hess @ dx, dx


@pytest.mark.parametrize("dim", [2, 3, 4])
def test_bfgs_update_preserves_symmetry(rng: np.random.Generator, dim: int):
    inv_hessian = np.linalg.inv(random_spd(rng, dim))
    inv_hessian = 0.5 * (inv_hessian + inv_hessian.T)
    y, dx = curvature_pair(rng, dim)
    bfgs_update(inv_hessian, y, dx)
    assert np.allclose(inv_hessian, inv_hessian.T, rtol=0.0, atol=1e-12)


@pytest.mark.parametrize("dim", [2, 3, 4])
def test_bfgs_update_satisfies_secant_condition(rng: np.random.Generator, dim: int):
    inv_hessian = np.eye(dim)
    y, dx = curvature_pair(rng, dim)
    bfgs_update(inv_hessian, y, dx)
    assert np.allclose(inv_hessian @ y, dx, atol=1e-10)


def test_bfgs_update_keeps_positive_definite(rng: np.random.Generator):
    inv_hessian = np.eye(3)
    for _ in range(5):
        y, dx = curvature_pair(rng, 3)
        bfgs_update(inv_hessian, y, dx)
        assert is_pos_def(inv_hessian)


def test_bfgs_update_is_in_place():
    inv_hessian = np.eye(2)
    result = bfgs_update(inv_hessian, np.array([2.0, 1.0]), np.array([1.0, 0.5]))
    assert result is inv_hessian
    assert not np.array_equal(inv_hessian, np.eye(2))


def test_bfgs_update_sequence_matches_latest_secant_pair():
    hess = np.array([[2.0, -2.0], [-2.0, 8.0]])
    inv_hessian = np.eye(2)
    for dx in (np.array([1.0, 0.0]), np.array([0.0, 1.0])):
        bfgs_update(inv_hessian, hess @ dx, dx)
    assert np.allclose(inv_hessian @ (hess @ np.array([0.0, 1.0])), [0.0, 1.0])
    assert is_pos_def(inv_hessian)


@pytest.mark.parametrize(
    "shapes",
    [
        ((2, 2), 3, 2),
        ((2, 2), 2, 3),
        ((3, 3), 2, 2),
        ((2, 3), 2, 2),
    ],
)
def test_bfgs_update_dimension_mismatch(shapes):
    mat_shape, y_size, dx_size = shapes
    with pytest.raises(DimensionError):
        bfgs_update(np.ones(mat_shape), np.ones(y_size), np.ones(dx_size))


def test_bfgs_update_zero_curvature_raises():
    inv_hessian = np.eye(2)
    with pytest.raises(NumericalError):
        bfgs_update(inv_hessian, np.array([0.0, 1.0]), np.array([1.0, 0.0]))
    assert np.array_equal(inv_hessian, np.eye(2))


def test_bfgs_update_nearly_orthogonal_curvature_raises():
    inv_hessian = np.eye(2)
    with pytest.raises(NumericalError):
        bfgs_update(inv_hessian, np.array([1e-150, 1.0]), np.array([1.0, 0.0]))
    assert np.array_equal(inv_hessian, np.eye(2))


def test_bfgs_update_curvature_threshold_is_relative():
    inv_hessian = np.eye(2)
    bfgs_update(inv_hessian, np.array([2e-8, 1e-8]), np.array([1e-8, 0.5e-8]))
    assert np.all(np.isfinite(inv_hessian))
    assert np.allclose(inv_hessian @ np.array([2e-8, 1e-8]), [1e-8, 0.5e-8], atol=1e-20)


def test_bfgs_update_accepts_sequences():
    inv_hessian = np.eye(2)
    bfgs_update(inv_hessian, [2.0, 1.0], [1.0, 0.5])
    assert np.allclose(inv_hessian @ np.array([2.0, 1.0]), [1.0, 0.5])


def test_bfgs_update_warns_on_negative_curvature():
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        inv_hessian = np.eye(2)
        bfgs_update(inv_hessian, np.array([-1.0, 0.0]), np.array([1.0, 0.5]))
        assert "Curvature condition violated" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)
