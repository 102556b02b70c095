"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_matrix(rng):
    """Correlated 4-variable dataset, 200 rows."""
    n, p = 200, 4
    mixing = np.array([
        [1.0, 0.5, 0.0, 0.2],
        [0.0, 1.0, 0.3, 0.0],
        [0.0, 0.0, 1.0, -0.4],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return rng.standard_normal((n, p)) @ mixing + np.array([10.0, -3.0, 0.5, 100.0])


@pytest.fixture
def offset_matrix(rng):
    """Small-variance data sitting far from zero."""
    return rng.standard_normal((500, 3)) + 1e9
