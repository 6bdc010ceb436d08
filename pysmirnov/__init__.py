"""
pysmirnov: Kolmogorov-Smirnov testing for Python.

Submodules:
    distributions: Empirical distribution and the Kolmogorov-Smirnov
        null distribution
    hypothesis: Two-sample and one-sample Kolmogorov-Smirnov tests
"""

__version__ = "0.1.0"

from pysmirnov import distributions
from pysmirnov import hypothesis
from pysmirnov.hypothesis import ks_test

__all__ = [
    "__version__",
    "distributions",
    "hypothesis",
    "ks_test",
]
