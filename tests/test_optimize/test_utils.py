import numpy as np
import pytest

from qnmin.optimize import DimensionError, IterationState
from qnmin.optimize.utils import as_vector, check_dimensions, is_pos_def, is_symmetric


def test_check_dimensions_returns_common_size():
    assert check_dimensions(np.eye(3), np.ones(3), np.zeros(3)) == 3


def test_check_dimensions_rejects_mismatch():
    with pytest.raises(DimensionError):
        check_dimensions(np.eye(2), np.ones(2), np.ones(4))
    with pytest.raises(DimensionError):
        check_dimensions(np.ones((2, 3)), np.ones(2))
    with pytest.raises(DimensionError):
        check_dimensions(np.eye(2), np.ones((2, 1)))


def test_is_symmetric_and_pos_def():
    mat = np.array([[2.0, 0.5], [0.5, 1.0]])
    assert is_symmetric(mat)
    assert is_pos_def(mat)
    assert not is_symmetric(np.array([[1.0, 2.0], [0.0, 1.0]]))
    assert not is_pos_def(np.array([[1.0, 2.0], [2.0, 1.0]]))


def test_as_vector_converts_sequences():
    vec = as_vector([1, 2, 3])
    assert vec.dtype == float
    assert np.array_equal(vec, np.array([1.0, 2.0, 3.0]))


def test_iteration_state_rotation_swaps_buffers():
    state = IterationState.allocate(np.array([1.0, 2.0]))
    assert np.array_equal(state.inv_hessian, np.eye(2))
    x0, x1, g0, g1 = state.x0, state.x1, state.grad0, state.grad1
    assert x0 is not x1
    state.rotate()
    assert state.x0 is x1 and state.x1 is x0
    assert state.grad0 is g1 and state.grad1 is g0
