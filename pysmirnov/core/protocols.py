"""
Core protocols for pysmirnov.

These define structural interfaces that domain-specific implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.
    
    Each backend knows how to take a domain-specific design and produce
    a domain-specific parameter payload.
    
    Backends are stateless: all configuration is passed via the design
    or at construction time. This makes them easy to test and share
    between threads.
    
    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """
    
    @property
    def name(self) -> str:
        """
        Backend identifier.
        
        Convention: '{device}_{domain}'
        Example: 'cpu_hypothesis'
        """
        ...
    
    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the statistical computation.
        
        Args:
            design: Domain-specific, already validated input container
            
        Returns:
            Result envelope containing parameter payload and metadata
            
        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...


@runtime_checkable
class HypothesisTest(Protocol):
    """
    Contract shared by every completed hypothesis test.
    
    A hypothesis test is a value object: the statistic, p-value and tail
    are fixed when the test is computed. Only the significance decision
    depends on a caller-chosen level and is evaluated on demand.
    
    Tests whose statistic cannot be mapped to a p-value (or back) outside
    of the original computation raise UnsupportedOperationError from the
    conversion methods rather than returning an approximation.
    """
    
    @property
    def statistic(self) -> float | None:
        """Observed value of the test statistic."""
        ...
    
    @property
    def p_value(self) -> float:
        """p-value of the observed statistic under the null hypothesis."""
        ...
    
    @property
    def tail(self) -> Any:
        """Which tail of the null distribution the p-value was taken from."""
        ...
    
    @property
    def statistic_distribution(self) -> Any:
        """Null distribution of the statistic used for the p-value."""
        ...
    
    def significant(self, alpha: float = 0.05) -> bool:
        """True iff the p-value is below the significance level alpha."""
        ...
    
    def p_value_to_statistic(self, p: float) -> float:
        """Statistic value that would produce the p-value p."""
        ...
    
    def statistic_to_p_value(self, x: float) -> float:
        """p-value that the statistic value x would produce."""
        ...
