"""Core data containers shared by the quasi-Newton components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

Array = np.ndarray
ObjectiveFunction = Callable[[Array], float]

MIN_DIM = 2
MAX_DIM = 4

DEFAULT_TOLERANCE = 1e-12
DEFAULT_MAX_ITERATIONS = 200
DEFAULT_DELTA = 1e-6

# Initial step of the line search issued by the driver.
LINE_SEARCH_STEP = 1e-15
# Two consecutive parabola minimizers closer than this end the refinement.
MIN_TOL = 1e-8


@dataclass(frozen=True)
class Objective:
    """Function to minimize together with its start point.

    ``delta`` is the central-difference step used for the gradient.
    """

    start: Optional[Array] = None
    func: Optional[ObjectiveFunction] = None
    delta: float = DEFAULT_DELTA


@dataclass(frozen=True)
class SolutionOptions:
    """Termination settings for a single optimization run."""

    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS


@dataclass
class OptimizationResult:
    """Outcome of :func:`qnmin.optimize.quasi_newton`.

    Attributes:
        solution_valid: True when either the objective change or the gradient
            norm dropped below the tolerance.
        iterations: Number of quasi-Newton iterations executed.
        solution: Final point (owned by the caller).
        objective: Objective value at ``solution``.
        grad_norm: Gradient 2-norm at ``solution``.
        message: Human-readable termination reason.
        nfev: Number of objective evaluations.
        history: Points visited, including the start; empty unless requested.
    """

    solution_valid: bool
    iterations: int
    solution: Array
    objective: float
    grad_norm: float
    message: str = ""
    nfev: int = 0
    history: List[Array] = field(default_factory=list)


@dataclass
class IterationState:
    """Buffers owned by one run, mutated in place between iterations."""

    x0: Array
    x1: Array
    grad0: Array
    grad1: Array
    dx: Array
    y: Array
    direction: Array
    inv_hessian: Array
    f0: float = float("inf")
    f1: float = float("inf")
    grad_norm: float = float("inf")
    iterations: int = 0

    @classmethod
    def allocate(cls, start: Array) -> "IterationState":
        dim = start.size
        return cls(
            x0=start.copy(),
            x1=start.copy(),
            grad0=np.zeros(dim),
            grad1=np.zeros(dim),
            dx=np.zeros(dim),
            y=np.zeros(dim),
            direction=np.zeros(dim),
            inv_hessian=np.eye(dim),
        )

    def rotate(self) -> None:
        """Make the new point and gradient current by swapping slots."""
        self.grad0, self.grad1 = self.grad1, self.grad0
        self.x0, self.x1 = self.x1, self.x0


__all__ = [
    "Array",
    "DEFAULT_DELTA",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "IterationState",
    "LINE_SEARCH_STEP",
    "MAX_DIM",
    "MIN_DIM",
    "MIN_TOL",
    "Objective",
    "ObjectiveFunction",
    "OptimizationResult",
    "SolutionOptions",
]
