"""
CPU reference backend for hypothesis tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from pysmirnov.core.result import Result
from pysmirnov.core.compute.timing import Timer
from pysmirnov.hypothesis._common import HTestParams
from pysmirnov.hypothesis.design import HypothesisDesign


class CPUHypothesisBackend:
    """CPU reference backend for hypothesis tests."""

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    def solve(self, design: HypothesisDesign) -> Result[HTestParams]:
        """Dispatch to test-specific implementation based on design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "ks_two_sample":
                from pysmirnov.hypothesis.backends._ks_test import ks_two_sample
                params, warnings_list = ks_two_sample(design)
            elif test_type == "ks_one_sample":
                from pysmirnov.hypothesis.backends._ks_test import ks_one_sample
                params, warnings_list = ks_one_sample(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        return Result(
            params=params,
            info={'test_type': test_type, 'n_observations': design.n_observations},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
