"""
Tolerance tiers for numerical validation.

Defines the precision expectations used when checking inputs (symmetry
of partial covariance matrices) and when comparing estimators against
each other (combined vs direct two-pass).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision reference: estimators must agree to this level
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)

# Combined vs direct computation over many partitions
COMBINED_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='combined_fp64',
    description='Merged partial estimates vs direct two-pass',
)

# Accepted asymmetry of a partial covariance matrix handed to the combiner.
# Matrices produced by a different library (or serialized as text) may
# carry rounding noise in the off-diagonal mirror.
SYMMETRY = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='symmetry',
    description='Symmetry check for partial covariance matrices',
)

