"""
Chunked streaming covariance.

CovarianceAccumulator consumes a sample matrix in row chunks, so data
larger than memory can be streamed from disk (memmap slices, query
batches). Each chunk is estimated with the two-pass method and merged
into the running state with the parallel combination formula.
Accumulators built on different workers merge with merge().
"""

from __future__ import annotations

import warnings
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.exceptions import DimensionError, ValidationError
from pycovariance.core.validation import check_min_samples
from pycovariance.covariance._two_pass import (
    as_sample_matrix,
    column_means,
    centered_comoments,
)
from pycovariance.covariance._combine import merge_moments
from pycovariance.covariance.design import PartialEstimate


class CovarianceAccumulator:
    """
    Streaming mean / covariance over row chunks.

    Parameters
    ----------
    n_variables : int
        Number of columns p in every chunk.

    Usage:
        acc = CovarianceAccumulator(n_variables=3)
        for start in range(0, len(X), 10_000):
            acc.update(X[start:start + 10_000])
        acc.covariance
    """

    def __init__(self, n_variables: int):
        if n_variables < 1:
            raise ValidationError(f"n_variables: must be >= 1, got {n_variables}")
        self._p = n_variables
        self.reset()

    def reset(self) -> None:
        """Zero all accumulators so the instance can be reused."""
        self._n = 0
        self._mean = np.zeros(self._p, dtype=np.float64)
        self._comoment = np.zeros((self._p, self._p), dtype=np.float64)

    def update(self, chunk: ArrayLike) -> None:
        """
        Incorporate a chunk of rows, shape (m, p).

        With p > 1 a 1D chunk is a single row; with p == 1 it is a column
        of m observations. Empty chunks are ignored.

        Raises:
            DimensionError: If the chunk does not have p columns
        """
        data = as_sample_matrix(chunk, 'chunk')
        m = data.shape[0]
        if m == 0:
            return
        if self._p > 1 and np.ndim(chunk) == 1:
            data = data.reshape(1, -1)
            m = 1
        if data.shape[1] != self._p:
            raise DimensionError(
                f"chunk: expected {self._p} columns, got {data.shape[1]}",
                expected=self._p,
                actual=data.shape[1],
            )

        mean_b = column_means(data)
        comoment_b = centered_comoments(data, mean_b)
        self._merge_state((m, mean_b, comoment_b))

    def merge(self, other: CovarianceAccumulator) -> None:
        """Fold another accumulator's state into this one."""
        if other._p != self._p:
            raise DimensionError(
                f"Cannot merge accumulators over {self._p} and {other._p} variables",
                expected=self._p,
                actual=other._p,
            )
        if other._n == 0:
            warnings.warn("Merging an empty CovarianceAccumulator has no effect")
            return
        self._merge_state((other._n, other._mean.copy(), other._comoment.copy()))

    def _merge_state(self, moments) -> None:
        if self._n == 0:
            self._n, self._mean, self._comoment = moments
            return
        self._n, self._mean, self._comoment = merge_moments(
            (self._n, self._mean, self._comoment), moments
        )

    @property
    def n(self) -> int:
        """Number of rows seen."""
        return self._n

    @property
    def p(self) -> int:
        return self._p

    @property
    def mean(self) -> NDArray[np.floating[Any]]:
        """Running column means, shape (p,)."""
        return self._mean.copy()

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        """Bessel-corrected covariance of all rows seen, shape (p, p)."""
        check_min_samples(self._n, 'CovarianceAccumulator')
        return self._comoment / (self._n - 1)

    def estimate(self) -> PartialEstimate:
        """Snapshot of the running state as a PartialEstimate."""
        check_min_samples(self._n, 'CovarianceAccumulator', min_samples=1)
        return PartialEstimate.from_moments(self._n, self._mean.copy(), self._comoment.copy())

    def __repr__(self) -> str:
        return f"CovarianceAccumulator(n={self._n}, p={self._p})"
