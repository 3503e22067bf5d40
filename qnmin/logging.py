"""Logging utilities for qnmin.

Loggers are namespaced under ``qnmin`` and write to stderr. The optimizer
logs iteration progress at DEBUG, run summaries at INFO and suspicious
numerics (option fallbacks, violated curvature) at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _stream_handler(stream, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get or create a ``qnmin.*`` logger; pass ``__name__`` from the caller.

    Loggers are cached so repeated calls never stack handlers.

    Example:
        >>> from qnmin.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("line search bracket found")
    """
    if not name.startswith("qnmin."):
        name = f"qnmin.{name}"

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(
            _stream_handler(sys.stderr, logging.Formatter(_DEFAULT_FORMAT))
        )
        logger.propagate = False
    _loggers[name] = logger
    _apply_level(logger, _DEFAULT_LEVEL)
    return logger


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def set_log_level(level: int | str) -> None:
    """Set the logging level for all qnmin loggers, current and future.

    Args:
        level: Logging level (``logging.DEBUG`` ...) or its name
            (``"DEBUG"``, ``"INFO"`` ...).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level
    for logger in _loggers.values():
        _apply_level(logger, level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Send every existing qnmin logger to one stream at ``level``.

    Loggers created afterwards pick up ``level`` but keep the default stderr
    handler.

    Example:
        >>> import logging
        >>> from qnmin.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG)
    """
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    for logger in _loggers.values():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_stream_handler(stream or sys.stderr, formatter))
    set_log_level(level)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
