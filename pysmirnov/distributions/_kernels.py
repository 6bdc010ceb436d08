"""
Numerical kernels for the Kolmogorov-Smirnov distribution.

Each function evaluates one regime of the distribution of the two-sided
statistic D_n or the one-sided statistic D_n^+. They assume their argument
lies inside the regime they were written for; regime selection lives in
KolmogorovSmirnovDistribution.

References:
    Simard, R. and L'Ecuyer, P. (2011). Computing the two-sided
        Kolmogorov-Smirnov distribution. J. Stat. Software 39(11).
    Marsaglia, G., Tsang, W. W. and Wang, J. (2003). Evaluating
        Kolmogorov's distribution. J. Stat. Software 8(18).
    Pelz, W. and Good, I. J. (1976). Approximating the lower tail-areas of
        the Kolmogorov-Smirnov one-sample statistic. JRSS B 38(2), 152-156.
    Ruben, H. and Gambino, J. (1982). The exact distribution of
        Kolmogorov's statistic D_n for n <= 10. Ann. Inst. Stat. Math. 34.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.special import factorial, gammaln, logsumexp

# Rescaling used by the Durbin matrix power (decimal exponent bookkeeping)
_RESCALE = 1e140
_RESCALE_EXP10 = 140

# Number of terms kept in each Pelz-Good theta series
_PELZ_TERMS = 21

_SQRT_2PI = math.sqrt(2.0 * math.pi)
_SQRT_HALF_PI = math.sqrt(0.5 * math.pi)
_PI2 = math.pi ** 2
_PI4 = _PI2 ** 2
_PI6 = _PI4 * _PI2


def _log_n_factorial_over_n_power_n(n: int) -> float:
    """log(n! / n^n)."""
    return float(gammaln(n + 1)) - n * math.log(n)


def ruben_gambino_cdf(n: int, d: float) -> float:
    """
    P(D_n <= d) for 1/(2n) < d <= 1/n.

    Closed form n!/n^n * (2nd - 1)^n, evaluated in log space.
    """
    t = 2.0 * n * d - 1.0
    return math.exp(_log_n_factorial_over_n_power_n(n) + n * math.log(t))


def upper_end_sf(n: int, d: float) -> float:
    """P(D_n > d) for 1 - 1/n <= d < 1: 2(1 - d)^n."""
    return 2.0 * (1.0 - d) ** n


def _matrix_power(A: NDArray, n: int) -> tuple[NDArray, int]:
    """
    A^n by repeated squaring, returned as (V, e) with A^n = V * 10^e.

    The centre element of V is kept below 1e140 so that the product of
    n matrices never overflows.
    """
    if n == 1:
        return A.copy(), 0
    V, e = _matrix_power(A, n // 2)
    B = V @ V
    e = 2 * e
    if n % 2 == 1:
        B = A @ B
    centre = B.shape[0] // 2
    if B[centre, centre] > _RESCALE:
        B = B / _RESCALE
        e += _RESCALE_EXP10
    return B, e


def durbin_cdf(n: int, d: float) -> float:
    """
    P(D_n < d) by Durbin's matrix formula.

    Exact for every n and d; cost grows like (nd)^3 log n, so it is only
    used where nd is moderate. Follows Marsaglia, Tsang and Wang (2003)
    without their quick right-tail shortcut.
    """
    k = int(n * d) + 1
    m = 2 * k - 1
    h = k - n * d

    idx = np.arange(m)
    lag = idx[:, None] - idx[None, :] + 1
    H = (lag >= 0).astype(np.float64)

    h_powers = h ** (idx + 1.0)
    H[:, 0] -= h_powers
    H[m - 1, :] -= h_powers[::-1]
    if 2.0 * h - 1.0 > 0.0:
        H[m - 1, 0] += (2.0 * h - 1.0) ** m
    H /= factorial(np.maximum(lag, 0))

    Q, exp10 = _matrix_power(H, n)
    s = Q[k - 1, k - 1]
    if s <= 0.0:
        return 0.0
    log_p = math.log(s) + _log_n_factorial_over_n_power_n(n) + exp10 * math.log(10.0)
    return min(1.0, math.exp(log_p))


def pelz_good_cdf(n: int, d: float) -> float:
    """
    P(D_n <= d) by the Pelz-Good asymptotic expansion.

    Kolmogorov's limit K0(z) plus correction terms K1, K2, K3 in powers of
    1/sqrt(n), with z = sqrt(n) * d. Each K_i is written as a theta series
    over half-integers (t = j + 1/2) and, for K2 and K3, integers.
    """
    sqrt_n = math.sqrt(n)
    z = sqrt_n * d
    z2 = z * z
    z4 = z2 * z2
    z6 = z4 * z2

    t2 = (np.arange(_PELZ_TERMS) + 0.5) ** 2
    k2 = np.arange(1, _PELZ_TERMS + 1, dtype=np.float64) ** 2
    w = _PI2 / (2.0 * z2)
    e_half = np.exp(-t2 * w)
    e_int = np.exp(-k2 * w)

    K0 = _SQRT_2PI / z * np.sum(e_half)

    K1 = _SQRT_HALF_PI / (3.0 * z4) * np.sum((_PI2 * t2 - z2) * e_half)

    K2 = _SQRT_HALF_PI / (36.0 * z * z6) * np.sum(
        (6.0 * z6 + 2.0 * z4
         + _PI2 * (2.0 * z4 - 5.0 * z2) * t2
         + _PI4 * (1.0 - 2.0 * z2) * t2 * t2) * e_half
    )
    K2 -= _SQRT_HALF_PI / (18.0 * z * z2) * np.sum(_PI2 * k2 * e_int)

    K3 = _SQRT_HALF_PI / (3240.0 * z4 * z6) * np.sum(
        (-30.0 * z6 - 90.0 * z6 * z2
         + _PI2 * (135.0 * z4 - 96.0 * z6) * t2
         + _PI4 * (212.0 * z4 - 60.0 * z2) * t2 * t2
         + _PI6 * (5.0 - 30.0 * z2) * t2 * t2 * t2) * e_half
    )
    K3 += _SQRT_HALF_PI / (108.0 * z6) * np.sum(
        (3.0 * _PI2 * k2 * z2 - _PI4 * k2 * k2) * e_int
    )

    return float(K0 + K1 / sqrt_n + K2 / n + K3 / (n * sqrt_n))


def smirnov_sf(n: int, d: float) -> float:
    """
    P(D_n^+ >= d) for 0 < d < 1 by the Smirnov-Birnbaum-Tingey sum.

        d * sum_{j=0}^{floor(n(1-d))} C(n, j) (d + j/n)^(j-1) (1 - d - j/n)^(n-j)

    All terms are positive, so the sum is accumulated in log space with
    no cancellation.
    """
    j_max = int(math.floor(n * (1.0 - d)))
    # The j = n(1-d) term is zero; drop it rather than take log(0)
    if n * (1.0 - d) - j_max <= 0.0:
        j_max -= 1
    if j_max < 0:
        return 0.0

    j = np.arange(j_max + 1, dtype=np.float64)
    q = np.minimum(d + j / n, 1.0)
    with np.errstate(divide='ignore'):
        log_terms = (
            gammaln(n + 1.0) - gammaln(j + 1.0) - gammaln(n - j + 1.0)
            + (j - 1.0) * np.log(q)
            + (n - j) * np.log1p(-q)
        )
    return min(1.0, d * math.exp(logsumexp(log_terms)))


def smirnov_asymptotic_sf(n: int, d: float) -> float:
    """
    P(D_n^+ >= d) for large n.

    Smirnov's exp(-2nd^2) limit with the Miller-type correction in 1/n,
    z = (6nd + 1)^2 / (18n).
    """
    t = 6.0 * n * d + 1.0
    z = t * t / (18.0 * n)
    v = 1.0 - (2.0 * z * z - 4.0 * z - 1.0) / (18.0 * n)
    if v <= 0.0:
        return 0.0
    return min(1.0, v * math.exp(-z))
