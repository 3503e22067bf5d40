"""Quasi-Newton minimization of functions of 2 to 4 variables.

Example
-------
>>> from qnmin.optimize import Objective, SolutionOptions, optimize
>>> def bowl(x):
...     return x[0] ** 2 - 2 * x[0] * x[1] + 4 * x[1] ** 2
>>> res = optimize(
...     Objective(start=[-3.0, 1.0], func=bowl, delta=1e-13),
...     SolutionOptions(tolerance=1e-11, max_iterations=5),
... )
>>> res.solution_valid
True
"""

from .bfgs import bfgs_update
from .core import (
    DEFAULT_DELTA,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    IterationState,
    Objective,
    OptimizationResult,
    SolutionOptions,
)
from .errors import (
    ConfigurationError,
    DimensionError,
    NumericalError,
    OptimizationError,
)
from .gradient import estimate_gradient
from .line_search import fit_parabola, parabolic_line_search
from .quasi_newton import optimize, quasi_newton
from .utils import is_pos_def, is_symmetric

__all__ = [
    "ConfigurationError",
    "DEFAULT_DELTA",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "DimensionError",
    "IterationState",
    "NumericalError",
    "Objective",
    "OptimizationError",
    "OptimizationResult",
    "SolutionOptions",
    "bfgs_update",
    "estimate_gradient",
    "fit_parabola",
    "is_pos_def",
    "is_symmetric",
    "optimize",
    "parabolic_line_search",
    "quasi_newton",
]
