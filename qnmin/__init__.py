"""qnmin - quasi-Newton minimization for small NumPy vectors."""

__version__ = "0.1.0"

from .debug import debug_context, is_debug_enabled, set_debug_enabled
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    ConfigurationError,
    DimensionError,
    NumericalError,
    Objective,
    OptimizationError,
    OptimizationResult,
    SolutionOptions,
    bfgs_update,
    estimate_gradient,
    fit_parabola,
    parabolic_line_search,
    quasi_newton,
)

__all__ = [
    "ConfigurationError",
    "DimensionError",
    "NumericalError",
    "Objective",
    "OptimizationError",
    "OptimizationResult",
    "SolutionOptions",
    "__version__",
    "bfgs_update",
    "configure_logging",
    "debug_context",
    "estimate_gradient",
    "fit_parabola",
    "get_logger",
    "is_debug_enabled",
    "parabolic_line_search",
    "quasi_newton",
    "set_debug_enabled",
    "set_log_level",
]
