"""
Exception hierarchy for pysmirnov.

All exceptions inherit from PySmirnovError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PySmirnovError(Exception):
    """Base exception for all pysmirnov errors."""
    pass


class ValidationError(PySmirnovError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks: empty or
    non-finite samples, non-positive sample sizes, unknown alternatives.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.
    
    Raised when a sample is not a 1D vector.
    """
    pass


class NumericalError(PySmirnovError):
    """
    Numerical computation failed or is undefined.
    
    Raised when a quantity is requested that has no finite value for the
    given object, e.g. the density of an unsmoothed step function.
    """
    pass


class UnsupportedOperationError(PySmirnovError, NotImplementedError):
    """
    Operation is declared by the hypothesis test contract but not
    available for this test.
    
    Raised instead of returning an approximate or meaningless value.
    
    Attributes:
        operation: Name of the unsupported operation
        test_name: Name of the test that does not support it
    """
    
    def __init__(
        self,
        message: str,
        operation: str | None = None,
        test_name: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.test_name = test_name
