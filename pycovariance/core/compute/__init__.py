"""
Shared compute infrastructure for PyCovariance.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerance tiers
"""

from pycovariance.core.compute.timing import Timer, timed
from pycovariance.core.compute.tolerances import (
    ToleranceTier,
    CPU_FP64,
    COMBINED_FP64,
    SYMMETRY,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "CPU_FP64",
    "COMBINED_FP64",
    "SYMMETRY",
]
