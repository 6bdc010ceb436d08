"""
HypothesisDesign: tagged union for hypothesis test inputs.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pysmirnov.core.exceptions import ValidationError
from pysmirnov.core.validation import check_sample
from pysmirnov.hypothesis._common import Alternative, parse_alternative


def _to_float64_1d(x: ArrayLike, name: str = "x") -> NDArray[np.floating[Any]]:
    """
    Convert to a read-only 1D float64 array.

    NaN and Inf are rejected rather than removed: a sample with missing
    values is a caller error, not something to silently shrink.
    """
    arr = np.array(check_sample(x, name), dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests.

    Uses a tagged-union approach: the `test_type` field identifies which
    fields are populated. Factory classmethods validate inputs.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    # Numeric vectors
    _x: NDArray[np.floating[Any]] | None = None
    _y: NDArray[np.floating[Any]] | None = None

    # Test configuration
    _alternative: Alternative = Alternative.UNEQUAL

    # One-sample KS: hypothesized CDF
    _distribution: str | None = None
    _dist_params: dict[str, float] | None = None
    _cdf: Callable[[NDArray], NDArray] | None = None

    # Metadata
    _data_name: str = ""

    # --- Properties ---

    @property
    def x(self) -> NDArray[np.floating[Any]] | None:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        return self._y

    @property
    def alternative(self) -> Alternative:
        return self._alternative

    @property
    def distribution(self) -> str | None:
        """Name of the hypothesized distribution (one-sample test)."""
        return self._distribution

    @property
    def dist_params(self) -> dict[str, float] | None:
        return self._dist_params

    @property
    def cdf(self) -> Callable[[NDArray], NDArray] | None:
        """Hypothesized CDF, resolved and validated (one-sample test)."""
        return self._cdf

    @property
    def data_name(self) -> str:
        return self._data_name

    @property
    def n_observations(self) -> int:
        n_x = len(self._x) if self._x is not None else 0
        n_y = len(self._y) if self._y is not None else 0
        return n_x + n_y

    # --- Factory classmethods ---

    @classmethod
    def for_ks_test(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        alternative: Alternative | str = "two.sided",
        distribution: str | Callable[..., Any] | None = None,
        **dist_params: float,
    ) -> HypothesisDesign:
        """
        Build design for ks_test().

        Parameters
        ----------
        x : array-like
            Numeric vector of observations. Must be non-empty and finite.
        y : array-like or None
            Second sample for two-sample test, OR None for one-sample.
        alternative : Alternative or str
            "two.sided" (default), "less", or "greater".
        distribution : str, callable or None
            Hypothesized distribution for the one-sample test: a name
            ("norm", "unif", "exp", or R's "pnorm", "punif", "pexp") or a
            CDF callable. If None and y is None, defaults to standard normal.
        **dist_params : float
            Distribution parameters (mean/sd for norm, min/max for unif,
            rate for exp), or keyword arguments for a CDF callable.
        """
        from pysmirnov.hypothesis.backends._ks_test import resolve_cdf

        alternative = parse_alternative(alternative)
        x_arr = _to_float64_1d(x, "x")

        if y is not None:
            if distribution is not None or dist_params:
                raise ValidationError(
                    "distribution and its parameters apply to the one-sample "
                    "test only; got a second sample y as well"
                )
            y_arr = _to_float64_1d(y, "y")
            return cls(
                test_type="ks_two_sample",
                _x=x_arr,
                _y=y_arr,
                _alternative=alternative,
                _data_name="x and y",
            )

        # One-sample
        if distribution is None:
            distribution = "norm"
        params = dict(dist_params)
        cdf = resolve_cdf(distribution, params)
        name = distribution if isinstance(distribution, str) else getattr(
            distribution, "__name__", "cdf"
        )
        return cls(
            test_type="ks_one_sample",
            _x=x_arr,
            _alternative=alternative,
            _distribution=name,
            _dist_params=params,
            _cdf=cdf,
            _data_name="x",
        )

    def __repr__(self) -> str:
        n_x = len(self._x) if self._x is not None else 0
        n_y = len(self._y) if self._y is not None else 0
        if n_y > 0:
            return (
                f"HypothesisDesign(test_type={self.test_type!r}, "
                f"n_x={n_x}, n_y={n_y}, alternative={self._alternative.value!r})"
            )
        return (
            f"HypothesisDesign(test_type={self.test_type!r}, "
            f"n_x={n_x}, distribution={self._distribution!r}, "
            f"alternative={self._alternative.value!r})"
        )
