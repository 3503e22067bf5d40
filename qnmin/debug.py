"""Debug mode management for qnmin.

When debug mode is on, the quasi-Newton driver checks that the inverse
Hessian approximation stays symmetric positive definite after every BFGS
update and logs a warning when it does not. Results are unaffected.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "QNMIN_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether qnmin debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    QNMIN_DEBUG environment variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable qnmin debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     pass
    """
    prev = _debug_enabled
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(prev)


__all__ = ["debug_context", "is_debug_enabled", "set_debug_enabled"]
