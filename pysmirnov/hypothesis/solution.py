"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams], satisfies the HypothesisTest
protocol and provides R's print.htest format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TYPE_CHECKING

from pysmirnov.core.exceptions import UnsupportedOperationError
from pysmirnov.core.result import Result
from pysmirnov.core.validation import check_open_unit_interval
from pysmirnov.distributions import EmpiricalDistribution, KolmogorovSmirnovDistribution
from pysmirnov.hypothesis._common import Alternative, DistributionTail, HTestParams

if TYPE_CHECKING:
    from pysmirnov.hypothesis.design import HypothesisDesign


@dataclass(frozen=True)
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams] and provides R's print.htest output format
    via summary(). All standard htest fields are available as properties.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Standard htest fields ---

    @property
    def statistic(self) -> float:
        """Test statistic value."""
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        """Name of the test statistic ('D', 'D^+' or 'D^-')."""
        return self._result.params.statistic_name

    @property
    def parameter(self) -> Mapping[str, float] | None:
        """Null distribution parameters (e.g. {'n': 3})."""
        return self._result.params.parameter

    @property
    def p_value(self) -> float:
        """p-value of the test."""
        return self._result.params.p_value

    @property
    def tail(self) -> DistributionTail:
        """Tail of the null distribution the p-value was taken from."""
        return self._result.params.tail

    @property
    def alternative(self) -> Alternative:
        """Alternative hypothesis direction."""
        return self._result.params.alternative

    @property
    def method(self) -> str:
        """Human-readable method name."""
        return self._result.params.method

    @property
    def data_name(self) -> str:
        """Description of the data."""
        return self._result.params.data_name

    # --- Test-specific extras ---

    @property
    def extras(self) -> Mapping[str, Any] | None:
        """Test-specific additional outputs."""
        return self._result.params.extras

    @property
    def statistic_distribution(self) -> KolmogorovSmirnovDistribution:
        """Null distribution of the statistic."""
        return self._result.params.extras['distribution']

    @property
    def ecdf_x(self) -> EmpiricalDistribution | None:
        """Empirical distribution of the first sample."""
        e = self._result.params.extras
        return e.get('ecdf_x') if e else None

    @property
    def ecdf_y(self) -> EmpiricalDistribution | None:
        """For the two-sample test: empirical distribution of the second sample."""
        e = self._result.params.extras
        return e.get('ecdf_y') if e else None

    @property
    def effective_n(self) -> int:
        """Sample size the null distribution was evaluated at."""
        return self.statistic_distribution.n

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Hypothesis test contract ---

    def significant(self, alpha: float = 0.05) -> bool:
        """
        Whether the null hypothesis is rejected at level alpha.

        Parameters
        ----------
        alpha : float
            Significance level in (0, 1). Default 0.05.

        Returns
        -------
        bool
            True iff p_value < alpha.
        """
        alpha = check_open_unit_interval(alpha, "alpha")
        return self.p_value < alpha

    def p_value_to_statistic(self, p: float) -> float:
        """
        Not available for the Kolmogorov-Smirnov test.

        Raises
        ------
        UnsupportedOperationError
            Always.
        """
        raise UnsupportedOperationError(
            f"{self.method} does not support mapping a p-value to a statistic",
            operation="p_value_to_statistic",
            test_name=self.method,
        )

    def statistic_to_p_value(self, x: float) -> float:
        """
        Not available for the Kolmogorov-Smirnov test.

        Raises
        ------
        UnsupportedOperationError
            Always.
        """
        raise UnsupportedOperationError(
            f"{self.method} does not support mapping a statistic to a p-value",
            operation="statistic_to_p_value",
            test_name=self.method,
        )

    # --- Formatting ---

    def to_dict(self) -> dict[str, Any]:
        """Plain-Python view of the htest fields."""
        p = self._result.params
        return {
            'statistic': p.statistic,
            'statistic_name': p.statistic_name,
            'parameter': dict(p.parameter) if p.parameter is not None else None,
            'p_value': p.p_value,
            'tail': p.tail.value,
            'alternative': p.alternative.value,
            'n': self.effective_n,
            'method': p.method,
            'data_name': p.data_name,
            'warnings': list(self._result.warnings),
        }

    def summary(self) -> str:
        """
        Format as R's print.htest output.

        Produces output like:
            Asymptotic two-sample Kolmogorov-Smirnov test

        data:  x and y
        D = 1, n = 3, p-value < 2.2e-16
        alternative hypothesis: two-sided
        """
        p = self._result.params
        lines = []

        lines.append(f"\t{p.method}")
        lines.append("")

        lines.append(f"data:  {p.data_name}")

        parts = [f"{p.statistic_name} = {p.statistic:.5g}"]
        if p.parameter is not None:
            for name, val in p.parameter.items():
                parts.append(f"{name} = {val:.5g}")
        p_str = _format_pvalue(p.p_value)
        if p_str.startswith("<"):
            parts.append(f"p-value {p_str}")
        else:
            parts.append(f"p-value = {p_str}")
        lines.append(", ".join(parts))

        lines.append(f"alternative hypothesis: {self._alternative_text()}")

        for w in self._result.warnings:
            lines.append(f"Warning: {w}")

        lines.append("")
        return "\n".join(lines)

    def _alternative_text(self) -> str:
        p = self._result.params
        if p.alternative is Alternative.UNEQUAL:
            return "two-sided"
        direction = "above" if p.alternative is Alternative.FIRST_LARGER else "below"
        if p.extras and 'ecdf_y' in p.extras:
            return f"the CDF of x lies {direction} that of y"
        return f"the CDF of x lies {direction} the null hypothesis"

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(method={p.method!r}, "
            f"{p.statistic_name}={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
