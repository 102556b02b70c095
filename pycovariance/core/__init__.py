"""
Core infrastructure for PyCovariance.

Shared abstractions used by the covariance estimators.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance configuration
"""

from pycovariance.core.result import Result
from pycovariance.core.exceptions import (
    CovarianceError,
    ValidationError,
    DimensionError,
    InsufficientSamplesError,
    ShapeError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "CovarianceError",
    "ValidationError",
    "DimensionError",
    "InsufficientSamplesError",
    "ShapeError",
]
