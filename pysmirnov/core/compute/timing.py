"""
Wall-clock timing for backend runs.

Result.timing holds 'total_seconds' plus one entry per named section,
e.g. {'total_seconds': 0.002, 'ks_two_sample': 0.0019}.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Total run time plus accumulated time per named section.

    Used by CPUHypothesisBackend.solve around the dispatched test.
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under `name`; repeated names add up."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Timing dict for Result.timing.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
