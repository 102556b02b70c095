"""
Combined covariance solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pycovariance.core.result import Result


@dataclass(frozen=True)
class CovarianceParams:
    """
    Parameter payload for a combined covariance estimate.
    """
    covariance_matrix: NDArray[np.floating[Any]]
    mean: NDArray[np.floating[Any]]
    n: int
    n_partitions: int
    partition_n: NDArray[np.integer[Any]]


@dataclass
class CovarianceSolution:
    """
    User-facing combined covariance results.

    Wraps Result[CovarianceParams] and provides convenient accessors.
    """
    _result: Result[CovarianceParams]
    _columns: tuple[str, ...] | None = None

    @property
    def covariance_matrix(self) -> NDArray[np.floating[Any]]:
        """Covariance matrix of the union (Bessel-corrected), shape (p, p)."""
        return self._result.params.covariance_matrix

    @property
    def variance(self) -> NDArray[np.floating[Any]]:
        """Per-column variance, shape (p,)."""
        return np.diag(self._result.params.covariance_matrix).copy()

    @property
    def mean(self) -> NDArray[np.floating[Any]]:
        """Column means of the union, shape (p,)."""
        return self._result.params.mean

    @property
    def n(self) -> int:
        """Total number of observations."""
        return self._result.params.n

    @property
    def p(self) -> int:
        return self._result.params.mean.shape[0]

    @property
    def n_partitions(self) -> int:
        return self._result.params.n_partitions

    @property
    def partition_n(self) -> NDArray[np.integer[Any]]:
        """Observation count of each partition, in merge order."""
        return self._result.params.partition_n

    @property
    def columns(self) -> tuple[str, ...] | None:
        return self._columns

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Covariance matrix as a labelled text table."""
        C = self.covariance_matrix
        p = C.shape[0]
        cols = self._columns or tuple(f"V{i+1}" for i in range(p))
        width = max(max(len(c) for c in cols), max(len(f"{v:.6f}") for v in C.ravel()))
        label_width = max(len(c) for c in cols)

        lines = [
            f"Combined covariance: n={self.n}, partitions={self.n_partitions}",
            " " * (label_width + 2) + "  ".join(c.rjust(width) for c in cols),
        ]
        for i, label in enumerate(cols):
            row = label.ljust(label_width) + "  "
            row += "  ".join(f"{C[i, j]:.6f}".rjust(width) for j in range(p))
            lines.append(row)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CovarianceSolution(n={self.n}, p={self.p}, "
            f"n_partitions={self.n_partitions})"
        )
