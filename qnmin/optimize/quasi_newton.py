"""Quasi-Newton (BFGS) minimization with numeric gradients."""

from __future__ import annotations

import math
import numbers
from typing import Optional

import numpy as np

from ..debug import is_debug_enabled
from ..logging import get_logger
from .bfgs import bfgs_update
from .core import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    LINE_SEARCH_STEP,
    MAX_DIM,
    MIN_DIM,
    Array,
    IterationState,
    Objective,
    ObjectiveFunction,
    OptimizationResult,
    SolutionOptions,
)
from .errors import ConfigurationError
from .gradient import estimate_gradient
from .line_search import parabolic_line_search
from .utils import is_pos_def, is_symmetric

logger = get_logger(__name__)


def _is_positive_number(value: object) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not math.isnan(value)
        and value > 0
    )


def _is_positive_integer(value: object) -> bool:
    return (
        isinstance(value, numbers.Integral)
        and not isinstance(value, bool)
        and value > 0
    )


def _resolve_options(solution: Optional[SolutionOptions]) -> tuple[float, int]:
    """Return ``(tolerance, max_iterations)``, substituting defaults for bad values."""
    if solution is None:
        return DEFAULT_TOLERANCE, DEFAULT_MAX_ITERATIONS
    max_iterations = solution.max_iterations
    if not _is_positive_integer(max_iterations):
        logger.warning(
            "Maximum iterations capped at default of %d.", DEFAULT_MAX_ITERATIONS
        )
        max_iterations = DEFAULT_MAX_ITERATIONS
    tolerance = solution.tolerance
    if not _is_positive_number(tolerance):
        logger.warning("Numerical tolerance is default of %g.", DEFAULT_TOLERANCE)
        tolerance = DEFAULT_TOLERANCE
    return float(tolerance), int(max_iterations)


def _validate_objective(
    objective: Optional[Objective],
) -> tuple[Array, ObjectiveFunction, float]:
    if objective is None:
        raise ConfigurationError("Undefined optimization objective.")
    if objective.start is None:
        raise ConfigurationError("Undefined start position.")
    if objective.func is None:
        raise ConfigurationError("Undefined objective function.")
    if not callable(objective.func):
        raise ConfigurationError("Objective function must be callable.")
    start = np.array(objective.start, dtype=float)
    if start.ndim != 1 or not MIN_DIM <= start.size <= MAX_DIM:
        raise ConfigurationError(
            f"Dimension is out of range: expected a vector of size {MIN_DIM}-{MAX_DIM}, "
            f"got shape {start.shape}."
        )
    delta = objective.delta
    if not (_is_positive_number(delta) and math.isfinite(delta)):
        raise ConfigurationError(f"Gradient step delta must be positive, got {delta}.")
    return start, objective.func, float(delta)


def _keep_iterating(state: IterationState, tolerance: float) -> bool:
    return (
        abs(state.f1 - state.f0) > tolerance
        and abs(state.grad_norm) > tolerance
    )


def _check_inverse_hessian(inv_hessian: Array, iteration: int) -> None:
    if not is_symmetric(inv_hessian):
        logger.warning("Inverse Hessian lost symmetry at iteration %d.", iteration)
    elif not is_pos_def(inv_hessian):
        logger.warning(
            "Inverse Hessian is not positive definite at iteration %d.", iteration
        )


def _set_direction(state: IterationState, grad: Array) -> None:
    """Store ``-N grad / |grad|`` in ``state.direction``."""
    if state.grad_norm == 0:
        state.direction.fill(0.0)
        return
    # y is free once the BFGS update has consumed it.
    np.multiply(grad, -1.0 / state.grad_norm, out=state.y)
    np.matmul(state.inv_hessian, state.y, out=state.direction)


def quasi_newton(
    objective: Optional[Objective],
    solution: Optional[SolutionOptions] = None,
    history: bool = False,
) -> OptimizationResult:
    """Minimize an objective of 2 to 4 variables with BFGS.

    The gradient is estimated by central differences with step
    ``objective.delta``. Each iteration runs a parabolic line search along
    the current direction, re-estimates the gradient, refines the inverse
    Hessian approximation (started at the identity) and derives the next
    direction from it.

    Iteration continues while the objective change and the gradient norm
    both exceed ``solution.tolerance`` and the iteration budget is not spent.
    The run is reported valid when either criterion falls below the
    tolerance.

    Parameters
    ----------
    objective:
        Start point, objective function and gradient step.
    solution:
        Tolerance and iteration budget. Missing, zero or NaN entries, and a
        non-integer budget, fall back to the defaults with a warning.
    history:
        Record every accepted point in ``OptimizationResult.history``.

    Raises
    ------
    ConfigurationError
        If the objective, start point or function is missing, or the start
        point dimension is outside [2, 4].
    NumericalError
        If the gradient, line search or BFGS update breaks down. No partial
        result is returned.
    """
    start, func, delta = _validate_objective(objective)
    tolerance, max_iterations = _resolve_options(solution)

    nfev = 0

    def counted(x: Array) -> float:
        nonlocal nfev
        nfev += 1
        return func(x)

    state = IterationState.allocate(start)
    state.f1 = counted(state.x0)
    _, state.grad_norm = estimate_gradient(state.x0, delta, counted, out=state.grad0)
    # Steepest descent until a curvature model exists.
    _set_direction(state, state.grad0)

    hist: list[Array] = []
    if history:
        hist.append(state.x0.copy())

    while _keep_iterating(state, tolerance) and state.iterations <= max_iterations:
        state.iterations += 1
        parabolic_line_search(
            state.x0, state.direction, counted, LINE_SEARCH_STEP, out=state.x1
        )
        _, state.grad_norm = estimate_gradient(
            state.x1, delta, counted, out=state.grad1
        )
        state.f0 = state.f1
        state.f1 = counted(state.x1)
        np.subtract(state.x1, state.x0, out=state.dx)
        np.subtract(state.grad1, state.grad0, out=state.y)
        # On the final iteration the step can vanish, leaving no curvature
        # information; the next direction is never used then.
        if _keep_iterating(state, tolerance):
            bfgs_update(state.inv_hessian, state.y, state.dx)
            if is_debug_enabled():
                _check_inverse_hessian(state.inv_hessian, state.iterations)
            _set_direction(state, state.grad1)
        logger.debug(
            "Iteration %d: f=%.17g |grad|=%.6g",
            state.iterations,
            state.f1,
            state.grad_norm,
        )
        state.rotate()
        if history:
            hist.append(state.x0.copy())

    value_converged = abs(state.f1 - state.f0) < tolerance
    grad_converged = abs(state.grad_norm) < tolerance
    if value_converged:
        message = "Objective change below tolerance."
    elif grad_converged:
        message = "Gradient norm below tolerance."
    elif state.iterations > max_iterations:
        message = "Maximum iterations reached."
    else:
        message = "Stopped without meeting the tolerance."
    logger.info(
        "Finished after %d iterations (%d evaluations): %s",
        state.iterations,
        nfev,
        message,
    )

    return OptimizationResult(
        solution_valid=value_converged or grad_converged,
        iterations=state.iterations,
        solution=state.x0.copy(),
        objective=float(state.f1),
        grad_norm=float(state.grad_norm),
        message=message,
        nfev=nfev,
        history=hist,
    )


optimize = quasi_newton


__all__ = ["optimize", "quasi_newton"]
