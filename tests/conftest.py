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
def shifted_normal_samples(rng):
    """Two normal samples of size 100 whose means differ by one sd."""
    x = rng.normal(0.0, 1.0, 100)
    y = rng.normal(1.0, 1.0, 100)
    return x, y
