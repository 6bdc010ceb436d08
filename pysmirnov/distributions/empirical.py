"""
Empirical distribution of a univariate sample.

With smoothing = 0 the distribution is the plain step-function ECDF,

    F(x) = #{s in sample : s <= x} / n,

right-continuous, 0 below the minimum and 1 at and above the maximum.
A positive smoothing value is the bandwidth of a Gaussian kernel used for
the density; the distribution function is always the unsmoothed ECDF.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysmirnov.core.exceptions import NumericalError, ValidationError
from pysmirnov.core.validation import check_finite_real, check_sample


def silverman_bandwidth(samples: NDArray[np.floating[Any]]) -> float:
    """
    Normal-reference bandwidth sigma * (4 / (3n))^(1/5).

    Zero for a single observation or a constant sample.
    """
    n = samples.shape[0]
    if n < 2:
        return 0.0
    sigma = float(np.std(samples, ddof=1))
    return sigma * (4.0 / (3.0 * n)) ** 0.2


class EmpiricalDistribution:
    """
    Empirical distribution built from a sample.

    Immutable: the sample is copied, sorted and made read-only at
    construction.

    Parameters
    ----------
    samples : array-like
        Non-empty 1D sample of finite real numbers. Ties are allowed.
    smoothing : float or None
        Gaussian kernel bandwidth for pdf(). 0 gives the pure step
        function (no density). None (default) uses Silverman's rule.

    Examples
    --------
    >>> F = EmpiricalDistribution([3.0, 1.0, 2.0, 2.0], smoothing=0)
    >>> F.cdf(2.0)
    0.75
    """

    def __init__(self, samples: ArrayLike, smoothing: float | None = None):
        arr = np.sort(check_sample(samples, "samples").astype(np.float64))
        arr.setflags(write=False)
        self._samples = arr

        if smoothing is None:
            smoothing = silverman_bandwidth(arr)
        else:
            smoothing = check_finite_real(smoothing, "smoothing")
            if smoothing < 0:
                raise ValidationError(f"smoothing: must be >= 0, got {smoothing}")
        self._smoothing = float(smoothing)

    # --- Properties ---

    @property
    def samples(self) -> NDArray[np.floating[Any]]:
        """Sorted, read-only sample values."""
        return self._samples

    @property
    def n(self) -> int:
        """Sample size."""
        return self._samples.shape[0]

    @property
    def smoothing(self) -> float:
        """Kernel bandwidth (0 for the pure step function)."""
        return self._smoothing

    @property
    def mean(self) -> float:
        return float(np.mean(self._samples))

    @property
    def variance(self) -> float:
        """Bessel-corrected sample variance; 0 for a single observation."""
        if self.n < 2:
            return 0.0
        return float(np.var(self._samples, ddof=1))

    # --- Distribution functions ---

    def cdf(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Fraction of sample values <= x.

        Vectorised over x; cdf(-inf) = 0, cdf(x) = 1 for x >= max(sample)
        and NaN for NaN x.
        """
        x = np.asarray(x, dtype=np.float64)
        counts = np.searchsorted(self._samples, x, side='right')
        result = np.where(np.isnan(x), np.nan, counts / self.n)
        if result.ndim == 0:
            return float(result)
        return result

    def sf(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """Fraction of sample values > x."""
        return 1.0 - self.cdf(x)

    def pdf(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Gaussian kernel density estimate with bandwidth `smoothing`.

        Raises
        ------
        NumericalError
            If smoothing is 0: a step function has no density.
        """
        h = self._smoothing
        if h == 0.0:
            raise NumericalError(
                "pdf is undefined for an unsmoothed empirical distribution "
                "(smoothing=0); construct with smoothing > 0 or None"
            )
        x_arr = np.asarray(x, dtype=np.float64)
        z = (x_arr[..., None] - self._samples) / h
        density = np.exp(-0.5 * z * z).sum(axis=-1) / (self.n * h * math.sqrt(2.0 * math.pi))
        if density.ndim == 0:
            return float(density)
        return density

    def __repr__(self) -> str:
        return (
            f"EmpiricalDistribution(n={self.n}, "
            f"smoothing={self._smoothing:.4g})"
        )
