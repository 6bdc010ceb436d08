"""
Tests for ks_test().

Two-sample p-values come from the null distribution at the effective
sample size round(n1 * n2 / (n1 + n2)); statistics are checked against
scipy.stats.ks_2samp. One-sample R reference values verified against
R 4.5.2.
"""

import dataclasses

import numpy as np
import pytest
from scipy import special, stats

from pysmirnov.core.exceptions import DimensionError, UnsupportedOperationError, ValidationError
from pysmirnov.core.protocols import Backend, HypothesisTest
from pysmirnov.distributions import KolmogorovSmirnovDistribution
from pysmirnov.hypothesis import (
    Alternative, DistributionTail, HTestParams, HypothesisDesign, ks_test,
)
from pysmirnov.hypothesis.backends import CPUHypothesisBackend
from pysmirnov.hypothesis.backends._ks_test import TIES_WARNING, effective_sample_size


class TestKSTwoSample:
    """Two-sample Kolmogorov-Smirnov test."""

    def test_basic(self):
        """
        ks_test(c(1,2,3,4,5), c(3,4,5,6,7)): D = 0.4 as in R.
        Effective n = round(25 / 10) = 3.
        """
        result = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7])
        assert result.statistic == pytest.approx(0.4, rel=1e-12)
        assert result.parameter == {"n": 3}
        assert result.p_value == pytest.approx(stats.kstwo(3).sf(0.4), rel=1e-7)
        assert result.statistic_name == "D"
        assert "two-sample" in result.method

    def test_alternative_greater(self):
        """D^+ = 0.4: the CDF of x lies above that of y."""
        result = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7], alternative="greater")
        assert result.statistic == pytest.approx(0.4, rel=1e-12)
        assert result.p_value == pytest.approx(special.smirnov(3, 0.4), rel=1e-8)
        assert result.statistic_name == "D^+"
        assert result.tail is DistributionTail.ONE_UPPER

    def test_alternative_less(self):
        """D^- = 0 when x is never to the right of y, so p = 1."""
        result = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7], alternative="less")
        assert result.statistic == pytest.approx(0.0, abs=1e-15)
        assert result.p_value == pytest.approx(1.0, abs=1e-15)
        assert result.statistic_name == "D^-"
        assert result.tail is DistributionTail.ONE_LOWER

    def test_separated_samples(self):
        """All of x below all of y: D = 1 and the difference is significant."""
        result = ks_test([1, 2, 3, 4, 5], [6, 7, 8, 9, 10])
        assert result.statistic == pytest.approx(1.0)
        assert result.p_value < 0.05
        assert result.significant()
        assert result.significant(0.01)

    def test_identical_five_values(self):
        """[1..5] against itself: D = 0, p = 1, not significant."""
        result = ks_test([1, 2, 3, 4, 5], [1, 2, 3, 4, 5])
        assert result.statistic == 0.0
        assert result.p_value == pytest.approx(1.0)
        assert not result.significant(0.05)

    def test_identical_samples(self):
        """D = 0 and p = 1, even though every value is tied."""
        result = ks_test([1, 2, 3], [1, 2, 3])
        assert result.statistic == pytest.approx(0.0, abs=1e-15)
        assert result.p_value == pytest.approx(1.0, abs=1e-15)
        assert not result.significant()

    def test_with_ties(self):
        """Ties across samples give the usual sup |F - G| and a warning."""
        result = ks_test([1, 2, 3, 4, 5], [1, 2, 3, 6, 7])
        assert result.statistic == pytest.approx(0.4, rel=1e-12)
        assert TIES_WARNING in result.warnings

    def test_no_warning_without_ties(self):
        result = ks_test([1, 2, 3, 4, 5], [3.5, 4.5, 5.5, 6.5, 7.5])
        assert result.warnings == ()

    def test_single_observations(self):
        """n1 = n2 = 1: the effective size rounds half away from zero to 1."""
        result = ks_test([0.0], [1.0])
        assert result.parameter == {"n": 1}
        assert result.statistic == pytest.approx(1.0)
        assert 0.0 <= result.p_value <= 1.0

        same = ks_test([0.5], [0.5])
        assert same.statistic == 0.0
        assert same.p_value == 1.0

    def test_unequal_sizes(self):
        x = [0.1, 0.4, 0.7]
        y = [0.2, 0.3, 0.5, 0.6, 0.8, 0.9]
        result = ks_test(x, y)
        assert result.parameter == {"n": 2}
        assert result.ecdf_x.n == 3
        assert result.ecdf_y.n == 6

    def test_shifted_normals_detected(self, shifted_normal_samples):
        """A one-sd location shift with 100 per group is detected."""
        x, y = shifted_normal_samples
        result = ks_test(x, y)
        assert result.significant(0.05)
        assert ks_test(x, y, alternative="greater").significant(0.05)
        assert not ks_test(x, y, alternative="less").significant(0.05)

    def test_detects_different_distributions_across_seeds(self):
        """25 draws each from N(0, 1) and N(2, 1): significant for nearly every seed."""
        hits = 0
        for seed in range(50):
            rng = np.random.default_rng(seed)
            x = rng.normal(0.0, 1.0, 25)
            y = rng.normal(2.0, 1.0, 25)
            hits += ks_test(x, y).significant(0.05)
        assert hits >= 45

    def test_p_value_from_effective_n_distribution(self, rng):
        x = rng.standard_normal(12)
        y = rng.standard_normal(20) + 0.3
        result = ks_test(x, y)
        n = effective_sample_size(12, 20)
        assert result.effective_n == n == 8
        assert result.statistic_distribution == KolmogorovSmirnovDistribution(n)
        assert result.p_value == pytest.approx(
            KolmogorovSmirnovDistribution(n).sf(result.statistic), rel=1e-14
        )


class TestKSTwoSampleStatistic:
    """Structural properties of the two-sample statistic."""

    @pytest.mark.parametrize("alternative", ["two.sided", "greater", "less"])
    def test_matches_scipy(self, rng, alternative):
        """Statistic equals scipy's, with and without ties."""
        x = rng.standard_normal(23)
        y = rng.standard_normal(31) + 0.2
        scipy_alt = {"two.sided": "two-sided", "greater": "greater", "less": "less"}[alternative]
        for a, b in [(x, y), (np.round(x), np.round(y))]:
            result = ks_test(a, b, alternative=alternative)
            expected = stats.ks_2samp(a, b, alternative=scipy_alt).statistic
            assert result.statistic == pytest.approx(expected, abs=1e-12)

    def test_swap_symmetry(self, rng):
        x = np.round(rng.standard_normal(15), 1)
        y = np.round(rng.standard_normal(18), 1)
        assert ks_test(x, y).statistic == pytest.approx(ks_test(y, x).statistic)
        assert ks_test(x, y, alternative="greater").statistic == pytest.approx(
            ks_test(y, x, alternative="less").statistic
        )

    def test_swap_exchanges_one_sided_p_values(self, rng):
        x = rng.standard_normal(12)
        y = rng.standard_normal(17) + 0.4
        greater = ks_test(x, y, alternative="greater")
        less_swapped = ks_test(y, x, alternative="less")
        assert greater.p_value == pytest.approx(less_swapped.p_value)
        assert ks_test(x, y).p_value == pytest.approx(ks_test(y, x).p_value)

    def test_two_sided_is_max_of_one_sided(self, rng):
        x = np.round(rng.standard_normal(25))
        y = np.round(rng.standard_normal(25) + 0.5)
        d = ks_test(x, y).statistic
        d_plus = ks_test(x, y, alternative="greater").statistic
        d_minus = ks_test(x, y, alternative="less").statistic
        assert d == pytest.approx(max(d_plus, d_minus))

    def test_bounds(self, rng):
        for _ in range(5):
            x = rng.exponential(size=rng.integers(1, 30))
            y = rng.exponential(size=rng.integers(1, 30))
            result = ks_test(x, y)
            assert 0.0 <= result.statistic <= 1.0
            assert 0.0 <= result.p_value <= 1.0

    def test_input_order_irrelevant(self, rng):
        x = rng.standard_normal(10)
        y = rng.standard_normal(10)
        assert ks_test(x, y).statistic == ks_test(x[::-1], rng.permutation(y)).statistic


class TestKSOneSample:
    """One-sample Kolmogorov-Smirnov test."""

    def test_normal(self):
        """
        R 4.5.2: ks.test(c(1,2,3,4,5), "pnorm", mean=3, sd=1.5)
        D = 0.14750746245307711, p-value = 0.99907073326002416
        """
        result = ks_test([1, 2, 3, 4, 5], distribution="norm", mean=3, sd=1.5)
        assert result.statistic == pytest.approx(0.14750746245307711, rel=1e-10)
        assert result.p_value == pytest.approx(0.99907073326002416, rel=1e-8)
        assert result.method == "Exact one-sample Kolmogorov-Smirnov test"

    def test_uniform(self):
        """
        R 4.5.2: ks.test(c(0.1,0.2,...,0.9), "punif")
        D = 0.1, p-value = 0.99987428406468037
        """
        x = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
        result = ks_test(x, distribution="punif")
        assert result.statistic == pytest.approx(0.1, rel=1e-10)
        assert result.p_value == pytest.approx(0.99987428406468037, rel=1e-8)

    def test_default_standard_normal(self):
        x = [0.1, -0.2, 0.3, -0.1, 0.05]
        assert ks_test(x).statistic == ks_test(x, distribution="norm", mean=0, sd=1).statistic
        assert ks_test(x).data_name == "x"

    @pytest.mark.parametrize("alternative, scipy_alt", [
        ("two.sided", "two-sided"),
        ("greater", "greater"),
        ("less", "less"),
    ])
    def test_matches_scipy_exact(self, rng, alternative, scipy_alt):
        x = rng.standard_normal(30) * 1.2
        result = ks_test(x, alternative=alternative)
        expected = stats.kstest(x, "norm", alternative=scipy_alt, method="exact")
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-12)
        assert result.p_value == pytest.approx(expected.pvalue, rel=1e-6)

    def test_exponential(self, rng):
        x = rng.exponential(scale=0.5, size=40)
        result = ks_test(x, distribution="exp", rate=2)
        expected = stats.kstest(x, stats.expon(scale=0.5).cdf)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-12)

    def test_callable_cdf(self, rng):
        x = rng.normal(1.0, 1.0, 20)
        by_name = ks_test(x, distribution="norm", mean=1.0)
        by_callable = ks_test(x, distribution=stats.norm.cdf, loc=1.0)
        assert by_callable.statistic == pytest.approx(by_name.statistic)

    def test_ties_warning(self):
        result = ks_test([0.1, 0.1, 0.5], distribution="unif")
        assert TIES_WARNING in result.warnings

    def test_large_sample_asymptotic_method(self, rng):
        x = rng.uniform(size=300_001)
        result = ks_test(x, distribution="unif", alternative="greater")
        assert result.method == "Asymptotic one-sample Kolmogorov-Smirnov test"
        assert result.ecdf_y is None

    def test_unknown_distribution_raises(self):
        with pytest.raises(ValidationError, match="Unknown distribution"):
            ks_test([1, 2, 3], distribution="poisson")

    def test_unknown_parameter_raises(self):
        with pytest.raises(ValidationError, match="Unknown parameter"):
            ks_test([1, 2, 3], distribution="norm", rate=2)

    @pytest.mark.parametrize("dist, params", [
        ("norm", {"sd": 0}),
        ("unif", {"min": 1, "max": 1}),
        ("exp", {"rate": -1}),
        ("norm", {"mean": np.inf}),
        ("norm", {"mean": "1"}),
        ("norm", {"sd": True}),
        ("exp", {"rate": None}),
    ])
    def test_invalid_parameters_raise(self, dist, params):
        with pytest.raises(ValidationError):
            ks_test([0.1, 0.2], distribution=dist, **params)

    def test_cdf_out_of_range_raises(self):
        with pytest.raises(ValidationError, match=r"\[0, 1\]"):
            ks_test([1.0, 2.0], distribution=lambda v: v * 10)


class TestHypothesisTestContract:
    """HTestSolution satisfies the HypothesisTest protocol."""

    def test_isinstance(self):
        assert isinstance(ks_test([1, 2, 3], [4, 5, 6]), HypothesisTest)

    @pytest.mark.parametrize("alternative, tail", [
        ("two.sided", DistributionTail.TWO_TAIL),
        ("greater", DistributionTail.ONE_UPPER),
        ("less", DistributionTail.ONE_LOWER),
    ])
    def test_tail(self, alternative, tail):
        assert ks_test([1, 2, 3], [2, 3, 4], alternative=alternative).tail is tail

    def test_alternative_enum(self):
        result = ks_test([1, 2, 3], [2, 3, 4], alternative=Alternative.FIRST_LARGER)
        assert result.alternative is Alternative.FIRST_LARGER
        assert result.alternative == "greater"

    @pytest.mark.parametrize("alpha", [0.001, 0.05, 0.5, 0.99])
    def test_significant_matches_p_value(self, rng, alpha):
        result = ks_test(rng.standard_normal(15), rng.standard_normal(15) + 0.8)
        assert result.significant(alpha) == (result.p_value < alpha)

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.05, 2.0])
    def test_significant_rejects_bad_alpha(self, alpha):
        result = ks_test([1, 2, 3], [4, 5, 6])
        with pytest.raises(ValidationError, match="alpha"):
            result.significant(alpha)

    def test_p_value_to_statistic_unsupported(self):
        result = ks_test([1, 2, 3], [4, 5, 6])
        with pytest.raises(UnsupportedOperationError) as exc_info:
            result.p_value_to_statistic(0.05)
        assert exc_info.value.operation == "p_value_to_statistic"

    def test_statistic_to_p_value_unsupported(self):
        result = ks_test([1, 2, 3], [4, 5, 6])
        with pytest.raises(UnsupportedOperationError) as exc_info:
            result.statistic_to_p_value(0.5)
        assert exc_info.value.operation == "statistic_to_p_value"


class TestKSValidation:
    """Invalid inputs are rejected before any computation."""

    @pytest.mark.parametrize("x, y", [
        ([], [1, 2]),
        ([1, 2], []),
        ([1, np.nan], [1, 2]),
        ([1, 2], [np.inf, 2]),
        (["a", "b"], [1, 2]),
    ])
    def test_bad_samples(self, x, y):
        with pytest.raises(ValidationError):
            ks_test(x, y)

    def test_2d_sample(self):
        with pytest.raises(DimensionError):
            ks_test(np.ones((3, 2)), [1, 2])

    def test_bad_alternative(self):
        with pytest.raises(ValidationError, match="alternative"):
            ks_test([1, 2], [3, 4], alternative="two-sided")

    def test_bad_backend(self):
        with pytest.raises(ValidationError, match="backend"):
            ks_test([1, 2], [3, 4], backend="gpu")

    def test_auto_backend(self):
        assert ks_test([1, 2], [3, 4], backend="auto").backend_name == "cpu_hypothesis"

    def test_cpu_backend_satisfies_protocol(self):
        assert isinstance(CPUHypothesisBackend(), Backend)

    def test_distribution_with_two_samples(self):
        with pytest.raises(ValidationError, match="one-sample"):
            ks_test([1, 2], [3, 4], distribution="norm")

    def test_effective_sample_size_zero_rejected(self):
        with pytest.raises(ValidationError, match="effective sample size"):
            effective_sample_size(0, 5)

    @pytest.mark.parametrize("n1, n2, expected", [
        (1, 1, 1), (2, 2, 1), (5, 5, 3), (3, 6, 2), (10, 30, 8), (1, 1000, 1),
    ])
    def test_effective_sample_size(self, n1, n2, expected):
        assert effective_sample_size(n1, n2) == expected


class TestKSOutput:
    """Design passthrough, metadata and formatting."""

    def test_design_passthrough(self):
        design = HypothesisDesign.for_ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7])
        assert design.test_type == "ks_two_sample"
        assert design.n_observations == 10
        assert ks_test(design).statistic == pytest.approx(0.4)

    def test_design_arrays_read_only(self):
        design = HypothesisDesign.for_ks_test([1.0, 2.0], [3.0, 4.0])
        with pytest.raises(ValueError):
            design.x[0] = 5.0

    def test_metadata(self):
        result = ks_test([1, 2, 3], [4, 5, 6])
        assert result.backend_name == "cpu_hypothesis"
        assert result.info["test_type"] == "ks_two_sample"
        assert "total_seconds" in result.timing
        assert result.data_name == "x and y"

    def test_to_dict(self):
        d = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7], alternative="greater").to_dict()
        assert d["statistic"] == pytest.approx(0.4)
        assert d["statistic_name"] == "D^+"
        assert d["tail"] == "one-upper"
        assert d["alternative"] == "greater"
        assert d["parameter"] == {"n": 3}
        assert d["n"] == 3

    def test_summary_two_sided(self):
        s = ks_test([1, 2, 3, 4, 5], [6, 7, 8, 9, 10]).summary()
        assert "Kolmogorov-Smirnov" in s
        assert "data:  x and y" in s
        assert "D = 1, n = 3" in s
        assert "alternative hypothesis: two-sided" in s

    def test_summary_one_sided(self):
        s = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7], alternative="greater").summary()
        assert "the CDF of x lies above that of y" in s
        s = ks_test([0.2, 0.4], distribution="unif", alternative="less").summary()
        assert "the CDF of x lies below the null hypothesis" in s

    def test_summary_shows_warning(self):
        s = ks_test([1, 2, 3], [1, 2, 3]).summary()
        assert TIES_WARNING in s

    def test_repr(self):
        r = repr(ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7]))
        assert "HTestSolution" in r
        assert "p_value" in r
        assert "D=0.4" in r

    def test_outcome_is_read_only(self):
        result = ks_test([1, 2, 3, 4, 5], [3, 4, 5, 6, 7])
        with pytest.raises(TypeError):
            result.parameter["n"] = 99
        with pytest.raises(TypeError):
            result.extras["distribution"] = None
        with pytest.raises(dataclasses.FrozenInstanceError):
            result._result = None
        assert result.effective_n == 3
        assert result.to_dict()["n"] == 3

    def test_outcome_does_not_alias_payload_dicts(self):
        extras = {"distribution": KolmogorovSmirnovDistribution(3)}
        params = HTestParams(
            statistic=0.4, statistic_name="D", parameter={"n": 3}, p_value=0.5,
            tail=DistributionTail.TWO_TAIL, alternative=Alternative.UNEQUAL,
            method="m", data_name="x and y", extras=extras,
        )
        extras["distribution"] = None
        assert params.extras["distribution"].n == 3
