"""
Null distribution of the Kolmogorov-Smirnov statistic.

KolmogorovSmirnovDistribution(n) is the distribution of

    D_n   = sup_x |F_n(x) - F(x)|        (two-sided)
    D_n^+ = sup_x (F_n(x) - F(x))        (one-sided)

for a sample of size n from a continuous F. The two-sample test uses it
with the effective sample size n1*n2/(n1+n2).

Evaluation follows Simard and L'Ecuyer (2011): closed forms near the ends
of the support, Durbin's exact matrix formula where n*d is moderate, the
Pelz-Good expansion for large n, and Smirnov's one-sided sum for the far
upper tail, where P(D_n > d) ~ 2 P(D_n^+ >= d).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysmirnov.core.exceptions import ValidationError
from pysmirnov.core.validation import check_positive_int
from pysmirnov.distributions._kernels import (
    durbin_cdf,
    pelz_good_cdf,
    ruben_gambino_cdf,
    smirnov_asymptotic_sf,
    smirnov_sf,
    upper_end_sf,
)

# Largest n evaluated with the exact algorithms in every regime
N_EXACT = 140
# Largest n for which the Durbin matrix is used in the lower tail when n > N_EXACT
N_DURBIN = 100_000
# Largest n for which the one-sided tail uses the exact Smirnov sum
N_SMIRNOV_EXACT = 200_000

# Thresholds on w = n * d^2
_W_CDF_IS_ONE = 18.0
_W_SF_IS_ZERO = 370.0
_W_UPPER_TAIL_SMALL_N = 4.0
_W_UPPER_TAIL_LARGE_N = 2.65
# Threshold on n^2 * d^3 below which Durbin is used for n > N_EXACT
_DURBIN_CUBIC_LIMIT = 7.0

VALID_KINDS = ("cdf", "sf", "one_sided")


def _elementwise(func: Callable[[float], float], d: ArrayLike) -> float | NDArray[np.floating[Any]]:
    """Apply a scalar function to a scalar or to each element of an array."""
    arr = np.asarray(d, dtype=np.float64)
    if arr.ndim == 0:
        return func(float(arr))
    out = np.fromiter((func(float(v)) for v in arr.ravel()), dtype=np.float64, count=arr.size)
    return out.reshape(arr.shape)


@dataclass(frozen=True)
class KolmogorovSmirnovDistribution:
    """
    Distribution of the Kolmogorov-Smirnov statistic for sample size n.

    Immutable. Methods accept a scalar or an array of statistic values.

    Attributes
    ----------
    n : int
        Sample size, or effective sample size for a two-sample test.
        Must be an integer >= 1.

    Examples
    --------
    >>> dist = KolmogorovSmirnovDistribution(10)
    >>> dist.sf(0.4)            # P(D_10 > 0.4)
    >>> dist.one_sided_sf(0.4)  # P(D_10^+ >= 0.4)
    """
    n: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "n", check_positive_int(self.n, "n"))

    # --- Public API ---

    def cdf(self, d: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """P(D_n <= d)."""
        return _elementwise(self._cdf, d)

    def sf(self, d: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Complementary distribution function P(D_n > d).

        Evaluated directly in the upper tail, so small p-values keep their
        relative accuracy instead of being lost to 1 - cdf(d).
        """
        return _elementwise(self._sf, d)

    def one_sided_sf(self, d: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """P(D_n^+ >= d), the upper tail of the one-sided statistic."""
        return _elementwise(self._one_sided_sf, d)

    def method(self, d: float, kind: str = "cdf") -> str:
        """
        Name of the algorithm used to evaluate the distribution at d.

        Parameters
        ----------
        d : float
            Statistic value.
        kind : str
            "cdf", "sf" or "one_sided".

        Returns
        -------
        str
            One of "limit", "durbin", "pelz", "smirnov",
            "smirnov_asymptotic".
        """
        if kind not in VALID_KINDS:
            raise ValidationError(
                f"kind must be one of {VALID_KINDS}, got {kind!r}"
            )
        if kind == "one_sided":
            return self._one_sided_regime(d)
        if kind == "sf":
            return self._sf_regime(d)
        return self._cdf_regime(d)

    # --- Regime selection ---

    def _at_support_ends(self, d: float) -> bool:
        n = self.n
        return (
            d <= 0.5 / n
            or d >= 1.0
            or n == 1
            or d <= 1.0 / n
            or d >= 1.0 - 1.0 / n
        )

    def _cdf_regime(self, d: float) -> str:
        n = self.n
        w = n * d * d
        if self._at_support_ends(d) or w >= _W_CDF_IS_ONE:
            return "limit"
        if n <= N_EXACT:
            return "durbin" if w < _W_UPPER_TAIL_SMALL_N else self._one_sided_regime(d)
        if w * d * n <= _DURBIN_CUBIC_LIMIT and n <= N_DURBIN:
            return "durbin"
        return "pelz"

    def _sf_regime(self, d: float) -> str:
        n = self.n
        w = n * d * d
        if self._at_support_ends(d) or w >= _W_SF_IS_ZERO:
            return "limit"
        threshold = _W_UPPER_TAIL_SMALL_N if n <= N_EXACT else _W_UPPER_TAIL_LARGE_N
        if w >= threshold:
            return self._one_sided_regime(d)
        return self._cdf_regime(d)

    def _one_sided_regime(self, d: float) -> str:
        n = self.n
        if d <= 0.0 or d >= 1.0 or n * d * d >= _W_SF_IS_ZERO:
            return "limit"
        return "smirnov" if n <= N_SMIRNOV_EXACT else "smirnov_asymptotic"

    # --- Scalar evaluation ---

    def _cdf(self, d: float) -> float:
        if math.isnan(d):
            return math.nan
        n = self.n
        regime = self._cdf_regime(d)
        if regime == "limit":
            return self._cdf_limit(d)
        if regime == "durbin":
            return durbin_cdf(n, d)
        if regime == "pelz":
            return min(1.0, max(0.0, pelz_good_cdf(n, d)))
        # Far upper tail: P(D_n > d) = 2 P(D_n^+ >= d) up to a term of
        # order exp(-8 n d^2)
        return max(0.0, 1.0 - 2.0 * self._one_sided_sf(d))

    def _cdf_limit(self, d: float) -> float:
        n = self.n
        if d <= 0.5 / n:
            return 0.0
        if d >= 1.0 or n * d * d >= _W_CDF_IS_ONE:
            return 1.0
        if n == 1:
            return 2.0 * d - 1.0
        if d <= 1.0 / n:
            return ruben_gambino_cdf(n, d)
        return 1.0 - upper_end_sf(n, d)

    def _sf(self, d: float) -> float:
        if math.isnan(d):
            return math.nan
        n = self.n
        regime = self._sf_regime(d)
        if regime == "limit":
            if d <= 0.5 / n:
                return 1.0
            if d >= 1.0 or n * d * d >= _W_SF_IS_ZERO:
                return 0.0
            if n == 1:
                return 2.0 - 2.0 * d
            if d <= 1.0 / n:
                return 1.0 - ruben_gambino_cdf(n, d)
            return upper_end_sf(n, d)
        if regime in ("smirnov", "smirnov_asymptotic"):
            return min(1.0, 2.0 * self._one_sided_sf(d))
        return max(0.0, 1.0 - self._cdf(d))

    def _one_sided_sf(self, d: float) -> float:
        if math.isnan(d):
            return math.nan
        n = self.n
        regime = self._one_sided_regime(d)
        if regime == "limit":
            return 1.0 if d <= 0.0 else 0.0
        if regime == "smirnov":
            return smirnov_sf(n, d)
        return smirnov_asymptotic_sf(n, d)
