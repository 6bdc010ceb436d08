"""
Tolerance tiers for numerical validation.

Defines precision expectations for the different evaluation paths of the
Kolmogorov-Smirnov null distribution:
- closed forms and exact finite sums: agree with an independent exact
  reference far beyond the digits anyone reports
- Durbin matrix: exact up to accumulated rounding in the matrix power
- asymptotic series (Pelz-Good, Smirnov/Miller): 4 significant digits
  against reference tables

Used by the test suite to pick the comparison tolerance for a given
evaluation method.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Closed forms near the ends of the support and exact finite sums
EXACT_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-14,
    name='exact_fp64',
    description='Closed form or exact finite sum in double precision',
)

# Durbin matrix power with decimal exponent tracking
MATRIX_FP64 = ToleranceTier(
    rtol=1e-7,
    atol=1e-12,
    name='matrix_fp64',
    description='Durbin matrix power, exact up to rounding',
)

# Asymptotic expansions in 1/sqrt(n)
ASYMPTOTIC = ToleranceTier(
    rtol=5e-4,
    atol=1e-9,
    name='asymptotic',
    description='Asymptotic series, 4 significant digits against reference tables',
)

_TIERS_BY_METHOD = {
    'limit': EXACT_FP64,
    'smirnov': EXACT_FP64,
    'durbin': MATRIX_FP64,
    'pelz': ASYMPTOTIC,
    'smirnov_asymptotic': ASYMPTOTIC,
}


def select_tolerance(method: str) -> ToleranceTier:
    """
    Select the tolerance tier for a Kolmogorov-Smirnov evaluation method.
    
    Args:
        method: Method name as reported by
            KolmogorovSmirnovDistribution.method()
            
    Raises:
        KeyError: If the method name is unknown
    """
    try:
        return _TIERS_BY_METHOD[method]
    except KeyError:
        raise KeyError(
            f"Unknown evaluation method {method!r}. "
            f"Known: {sorted(_TIERS_BY_METHOD)}"
        ) from None
