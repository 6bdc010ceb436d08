"""
Core infrastructure for pysmirnov.

This module provides shared abstractions and utilities used by the
distribution and hypothesis-testing subpackages.

Key components:
    protocols: Backend, HypothesisTest protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from pysmirnov.core.protocols import Backend, HypothesisTest
from pysmirnov.core.result import Result
from pysmirnov.core.exceptions import (
    PySmirnovError,
    ValidationError,
    DimensionError,
    NumericalError,
    UnsupportedOperationError,
)

__all__ = [
    # Protocols
    "Backend",
    "HypothesisTest",
    # Result
    "Result",
    # Exceptions
    "PySmirnovError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "UnsupportedOperationError",
]
