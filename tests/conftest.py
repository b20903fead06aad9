"""
conftest.py - Pytest Configuration and Shared Fixtures

Fixtures are organized by category:
- Random number generators (for reproducibility)
- Loading matrices (various shapes and structures)
- Logging capture
"""

import pytest
import numpy as np
from loguru import logger

from factor_loadings import loading_matrix, nnz_loading


# =============================================================================
# RANDOM NUMBER GENERATORS
# =============================================================================

@pytest.fixture
def rng():
    """
    Provide a seeded random number generator for reproducible tests.

    All tests should use this fixture (or derive from it) to ensure
    reproducibility across runs.
    """
    return np.random.default_rng(seed=42)


@pytest.fixture
def rng_alternate():
    """Alternate RNG with different seed for comparison tests."""
    return np.random.default_rng(seed=12345)


# =============================================================================
# LOADING MATRICES
# =============================================================================

@pytest.fixture
def ones_loading():
    """
    The 5x3 lower-triangular matrix of ones.

    Structure:
    - Column 1: [1, 1, 1, 1, 1]
    - Column 2: [0, 1, 1, 1, 1]
    - Column 3: [0, 0, 1, 1, 1]
    """
    return loading_matrix(np.ones(nnz_loading(5, 3)), 5, 3)


@pytest.fixture
def random_loading(rng):
    """A 20x3 loading matrix with N(0, 1) free entries."""
    nrows, ncols = 20, 3
    return loading_matrix(rng.standard_normal(nnz_loading(nrows, ncols)), nrows, ncols)


@pytest.fixture
def simple_structure():
    """
    A 6x2 perfect simple structure.

    Factor 1 loads on variables 0-2, factor 2 on variables 3-5.
    """
    S = np.zeros((6, 2))
    S[:3, 0] = [0.9, 0.8, 0.7]
    S[3:, 1] = [0.6, 0.8, 0.9]
    return S


@pytest.fixture
def rotated_simple_structure(simple_structure):
    """The simple structure rotated by 30 degrees."""
    theta = np.pi / 6
    R = np.array([
        [np.cos(theta), -np.sin(theta)],
        [np.sin(theta), np.cos(theta)],
    ])
    return simple_structure @ R


# =============================================================================
# LOGGING
# =============================================================================

@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def tolerance():
    """Standard numerical tolerance for float comparisons."""
    return {"rtol": 1e-8, "atol": 1e-10}
