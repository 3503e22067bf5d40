"""Pytest configuration and shared fixtures for qnmin tests.

This module provides:
- A deterministic numpy RNG fixture
- Reset of the debug flag and logger levels around every test
"""

import logging
import os

import numpy as np
import pytest

from qnmin.debug import is_debug_enabled, set_debug_enabled
from qnmin.logging import set_log_level


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def restore_global_state():
    """Undo debug-mode and log-level changes made by a test."""
    debug = is_debug_enabled()
    yield
    set_debug_enabled(debug)
    set_log_level(logging.WARNING)
