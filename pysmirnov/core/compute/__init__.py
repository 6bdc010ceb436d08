"""
Shared compute infrastructure for pysmirnov.

Submodules:
    timing: Wall-clock timing for backend runs
    tolerances: Tolerance tiers for numerical comparison
"""

from pysmirnov.core.compute.timing import Timer
from pysmirnov.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
