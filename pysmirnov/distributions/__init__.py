"""
Distributions used by the Kolmogorov-Smirnov tests.

Public API:
    EmpiricalDistribution(samples, smoothing)  - step-function ECDF of a sample
    KolmogorovSmirnovDistribution(n)           - null distribution of D_n, D_n^+
"""

from pysmirnov.distributions.empirical import EmpiricalDistribution
from pysmirnov.distributions.kolmogorov_smirnov import KolmogorovSmirnovDistribution

__all__ = [
    "EmpiricalDistribution",
    "KolmogorovSmirnovDistribution",
]
