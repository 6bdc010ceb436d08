"""
Generic result container for all pysmirnov computations.

The Result class provides a standardized envelope that all domain-specific
results use. This enables shared tooling for timing, diagnostics and
serialization while allowing domains to define their own parameter structures.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (test type, sample sizes)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.
    
    Type Parameters:
        P: The domain-specific parameter payload type
        
    Attributes:
        params: Domain-specific parameters (statistic, p-value, etc.)
        info: Structured metadata (test type, sample sizes)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        
    The frozen=True ensures results are immutable after creation: a result
    represents a completed computation, not live state.
    
    Examples:
        >>> Result(
        ...     params=HTestParams(statistic=0.4, ...),
        ...     info={'test_type': 'ks_two_sample'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_hypothesis',
        ...     warnings=('p-value will be approximate in the presence of ties',),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    
    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
