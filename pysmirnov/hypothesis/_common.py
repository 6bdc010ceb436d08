"""
Common types for hypothesis testing.

Defines HTestParams (maps to R's htest class), the Alternative enum and
the DistributionTail enum.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pysmirnov.core.exceptions import ValidationError


class Alternative(str, Enum):
    """
    Alternative hypothesis of a Kolmogorov-Smirnov test.

    Values follow R's naming. For two samples, "greater" means the CDF of
    the first sample lies above that of the second (the first sample is
    stochastically smaller); for one sample, the empirical CDF lies above
    the hypothesized one.
    """
    UNEQUAL = "two.sided"
    FIRST_LARGER = "greater"
    FIRST_SMALLER = "less"


class DistributionTail(str, Enum):
    """Tail of the null distribution a p-value was taken from."""
    TWO_TAIL = "two-tail"
    ONE_UPPER = "one-upper"
    ONE_LOWER = "one-lower"


VALID_ALTERNATIVES = tuple(a.value for a in Alternative)


def parse_alternative(alternative: Alternative | str) -> Alternative:
    """Validate and return the alternative as an enum member."""
    try:
        return Alternative(alternative)
    except ValueError:
        raise ValidationError(
            f"alternative must be one of {VALID_ALTERNATIVES}, got {alternative!r}"
        ) from None


def tail_for(alternative: Alternative) -> DistributionTail:
    """Tail of the null distribution used for the given alternative."""
    if alternative is Alternative.UNEQUAL:
        return DistributionTail.TWO_TAIL
    if alternative is Alternative.FIRST_LARGER:
        return DistributionTail.ONE_UPPER
    if alternative is Alternative.FIRST_SMALLER:
        return DistributionTail.ONE_LOWER
    raise ValueError(f"Unhandled alternative: {alternative!r}")


def statistic_name_for(alternative: Alternative) -> str:
    """R's statistic label: D, D^+ or D^-."""
    if alternative is Alternative.UNEQUAL:
        return "D"
    if alternative is Alternative.FIRST_LARGER:
        return "D^+"
    if alternative is Alternative.FIRST_SMALLER:
        return "D^-"
    raise ValueError(f"Unhandled alternative: {alternative!r}")


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Maps to R's htest structure. Every test returns this same structure;
    test-specific extras go in the `extras` dict.

    Attributes
    ----------
    statistic : float
        Test statistic value (D, D^+ or D^-), in [0, 1].
    statistic_name : str
        Name of the test statistic ("D", "D^+", "D^-").
    parameter : dict or None
        Parameters of the null distribution, e.g. {"n": 3} for the
        (effective) sample size.
    p_value : float
        p-value of the test, in [0, 1].
    tail : DistributionTail
        Tail of the null distribution the p-value was taken from.
    alternative : Alternative
        Alternative hypothesis under test.
    method : str
        Human-readable method name.
    data_name : str
        Description of the data, e.g. "x and y".
    extras : mapping or None
        Test-specific objects: the null distribution ("distribution"),
        the empirical distributions ("ecdf_x", "ecdf_y"), sample sizes.

    parameter and extras are stored as read-only mappings.
    """
    statistic: float
    statistic_name: str
    parameter: Mapping[str, float] | None
    p_value: float
    tail: DistributionTail
    alternative: Alternative
    method: str
    data_name: str
    extras: Mapping[str, Any] | None = None

    def __post_init__(self):
        # read-only copies
        if self.parameter is not None:
            object.__setattr__(self, "parameter", MappingProxyType(dict(self.parameter)))
        if self.extras is not None:
            object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))
