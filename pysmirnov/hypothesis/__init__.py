"""
Hypothesis testing module.

Provides the Kolmogorov-Smirnov test following R's ks.test().

Public API:
    ks_test(x, y)        - Two-sample Kolmogorov-Smirnov test
    ks_test(x, distribution=...) - One-sample test against a known CDF
"""

from pysmirnov.hypothesis.solvers import ks_test
from pysmirnov.hypothesis.design import HypothesisDesign
from pysmirnov.hypothesis._common import Alternative, DistributionTail, HTestParams
from pysmirnov.hypothesis.solution import HTestSolution

__all__ = [
    "ks_test",
    "HypothesisDesign",
    "Alternative",
    "DistributionTail",
    "HTestParams",
    "HTestSolution",
]
