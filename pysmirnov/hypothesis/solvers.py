"""
Solver dispatch for hypothesis tests.

Provides the R-named function ks_test().
"""

from __future__ import annotations

from typing import Any, Callable, Literal
from numpy.typing import ArrayLike

from pysmirnov.core.exceptions import ValidationError
from pysmirnov.core.protocols import Backend
from pysmirnov.hypothesis.design import HypothesisDesign
from pysmirnov.hypothesis.solution import HTestSolution
from pysmirnov.hypothesis.backends.cpu import CPUHypothesisBackend


BackendChoice = Literal['cpu', 'auto']


def _get_backend(backend: str = 'cpu') -> Backend:
    """
    Select backend for hypothesis tests.

    Only a CPU backend exists; 'auto' resolves to it.
    """
    if backend in ('cpu', 'auto'):
        return CPUHypothesisBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu' or 'auto'."
    )


def ks_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    distribution: str | Callable[..., Any] | None = None,
    backend: str = 'cpu',
    **dist_params: float,
) -> HTestSolution:
    """
    Kolmogorov-Smirnov test. Follows R ks.test().

    With two samples, D is the largest discrepancy between their empirical
    CDFs and the p-value comes from the null distribution at the effective
    sample size round(n1 * n2 / (n1 + n2)). With one sample, D compares the
    empirical CDF of x with a fully specified continuous distribution.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        Numeric vector of observations. Must be non-empty and finite.
    y : array-like or None
        Second sample for two-sample test. If None, performs
        one-sample test against a theoretical distribution.
    alternative : str
        "two.sided" (default), "less", or "greater". "greater" means the
        CDF of x lies above that of y (or of the hypothesized distribution).
    distribution : str, callable or None
        Distribution for the one-sample test ("norm", "unif", "exp", or a
        CDF callable). If None and y is None, defaults to standard normal.
    backend : str
        'cpu' (default) or 'auto'.
    **dist_params : float
        Distribution parameters (e.g., mean=0, sd=1 for "norm").

    Returns
    -------
    HTestSolution
        Test result with statistic (D), p_value, tail and the null
        distribution.

    Examples
    --------
    >>> result = ks_test([1, 2, 3, 4, 5], [6, 7, 8, 9, 10])
    >>> result.statistic
    1.0
    >>> result.significant()
    True
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        design = HypothesisDesign.for_ks_test(
            x, y,
            alternative=alternative,
            distribution=distribution,
            **dist_params,
        )

    be = _get_backend(backend)
    result = be.solve(design)
    return HTestSolution(_result=result, _design=design)
