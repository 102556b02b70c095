"""
Generic result container for PyCovariance computations.

The Result class provides a standardized envelope for estimator output.
This enables shared tooling for timing, reproducibility and inspection
while letting each estimator define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, n_partitions, ...)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions that produced a result."""
    import numpy
    import scipy
    from pycovariance import __version__

    return {
        'pycovariance_version': __version__,
        'numpy_version': numpy.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for covariance computations.

    Type Parameters:
        P: The estimator-specific parameter payload type

    Attributes:
        params: Estimator-specific parameters (covariance matrix, means, ...)
        info: Structured metadata (method, number of partitions, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the algorithm that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions, generated when not given

    Examples:
        >>> Result(
        ...     params=CovarianceParams(covariance_matrix=C, mean=m, n=120),
        ...     info={'method': 'chan', 'n_partitions': 4},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_chan'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
