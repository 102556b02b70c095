"""
Packed estimate rows.

Partial estimates travel between processes as a single k x (p + p*p)
matrix: row k holds the partition's mean vector followed by its
covariance matrix flattened row-major. Sample counts travel separately.
"""

from __future__ import annotations

import math
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.exceptions import ShapeError
from pycovariance.core.validation import check_array, check_2d
from pycovariance.covariance._combine import combine_cov_estimates


def packed_width(p: int) -> int:
    """Columns of a packed row for p variables."""
    return p + p * p


def n_variables_from_width(width: int) -> int:
    """
    Solve p + p^2 = width for p.

    Raises:
        ShapeError: If no whole p produces this width
    """
    p = (math.isqrt(1 + 4 * width) - 1) // 2
    if p < 1 or packed_width(p) != width:
        raise ShapeError(
            f"mn_covs: width {width} is not p + p^2 for any whole p",
            actual=width,
        )
    return p


def pack_estimates(
    means: ArrayLike | Sequence[ArrayLike],
    covariances: ArrayLike | Sequence[ArrayLike],
) -> NDArray[np.floating[Any]]:
    """
    Pack k (mean, covariance) pairs into a k x (p + p*p) matrix.

    Raises:
        ShapeError: If the number of means and covariances differ or shapes disagree
    """
    mean_arr = check_array(means, 'means')
    cov_arr = check_array(covariances, 'covariances')
    if mean_arr.ndim == 1:
        mean_arr = mean_arr.reshape(1, -1)
    if cov_arr.ndim == 2:
        cov_arr = cov_arr.reshape(1, *cov_arr.shape)

    k, p = mean_arr.shape
    if cov_arr.shape != (k, p, p):
        raise ShapeError(
            f"covariances: expected shape ({k}, {p}, {p}) to match means, got {cov_arr.shape}",
            shape=cov_arr.shape,
        )
    return np.hstack([mean_arr, cov_arr.reshape(k, p * p)])


def unpack_estimates(
    mn_covs: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Split packed rows into means (k, p) and covariances (k, p, p).
    """
    packed = check_array(mn_covs, 'mn_covs')
    if packed.ndim == 1:
        packed = packed.reshape(1, -1)
    check_2d(packed, 'mn_covs')

    k, width = packed.shape
    p = n_variables_from_width(width)
    means = packed[:, :p]
    covariances = packed[:, p:].reshape(k, p, p)
    return means, covariances


def combine_packed(mn_covs: ArrayLike, ns: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Combine packed partial estimates into a single (p, p) covariance matrix.

    Parameters
    ----------
    mn_covs : array-like, shape (k, p + p*p)
        One row per partition: mean vector, then row-major covariance.
    ns : array-like, shape (k,)
        Sample count of each partition.
    """
    means, covariances = unpack_estimates(mn_covs)
    return combine_cov_estimates(list(covariances), ns, list(means))
