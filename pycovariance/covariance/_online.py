"""
Single-pass (online) covariance of two variables.

Welford's co-moment update: after each observation the running means
move by delta / n and the co-moment grows by the product of the x
deviation from the old mean and the y deviation from the new mean.
This avoids the cancellation in sum(x*y) - n*mean(x)*mean(y) when the
data sit far from zero.

Reference:
    Welford, B. P. (1962). "Note on a method for calculating corrected sums
    of squares and products." Technometrics, 4(3), 419-420.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.validation import (
    check_array,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


class OnlineCovariance:
    """
    Streaming covariance accumulator for a pair of variables.

    Values can be fed one pair at a time (for iterators that are never
    materialized) or in batches. State is O(1) in the number of
    observations.

    Usage:
        acc = OnlineCovariance()
        for x, y in rows:
            acc.update(x, y)
        acc.covariance
    """

    def __init__(self):
        self._n = 0
        self._mean_x = 0.0
        self._mean_y = 0.0
        self._comoment = 0.0

    def update(self, x: float, y: float) -> None:
        """Incorporate one (x, y) observation."""
        self._n += 1
        dx = x - self._mean_x
        self._mean_x += dx / self._n
        self._mean_y += (y - self._mean_y) / self._n
        self._comoment += dx * (y - self._mean_y)

    def update_batch(self, x: ArrayLike, y: ArrayLike) -> None:
        """Incorporate paired observations in order."""
        xs = check_array(x, 'x').ravel()
        ys = check_array(y, 'y').ravel()
        check_consistent_length(xs, ys, names=('x', 'y'))
        for xi, yi in zip(xs.tolist(), ys.tolist()):
            self.update(xi, yi)

    @property
    def n(self) -> int:
        """Number of observations seen."""
        return self._n

    @property
    def mean_x(self) -> float:
        return self._mean_x

    @property
    def mean_y(self) -> float:
        return self._mean_y

    @property
    def comoment(self) -> float:
        """Sum of centered cross-products."""
        return self._comoment

    @property
    def covariance(self) -> float:
        """Sample covariance (Bessel-corrected, n-1)."""
        check_min_samples(self._n, 'OnlineCovariance')
        return self._comoment / (self._n - 1)

    def __repr__(self) -> str:
        return f"OnlineCovariance(n={self._n})"


def _validate_pair(
    x1: ArrayLike, x2: ArrayLike
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    a = check_array(x1, 'x1')
    b = check_array(x2, 'x2')
    check_1d(a, 'x1')
    check_1d(b, 'x2')
    check_consistent_length(a, b, names=('x1', 'x2'))
    check_min_samples(a.shape[0], 'x1')
    return a, b


def online_covar(x1: ArrayLike, x2: ArrayLike) -> float:
    """
    Sample covariance of two equal-length sequences in one pass.

    Parameters
    ----------
    x1, x2 : array-like
        1D numeric sequences of the same length n >= 2.

    Returns
    -------
    float
        sum((x1 - mean(x1)) * (x2 - mean(x2))) / (n - 1)

    Raises
    ------
    DimensionError
        If the lengths differ or an input is not 1D.
    InsufficientSamplesError
        If n < 2.
    """
    a, b = _validate_pair(x1, x2)

    acc = OnlineCovariance()
    for xi, yi in zip(a.tolist(), b.tolist()):
        acc.update(xi, yi)
    return acc.covariance
