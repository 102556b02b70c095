"""
Two-pass covariance matrix.

Pass 1 computes column means, pass 2 accumulates centered cross-products
for every unordered column pair. Each (i, j) entry is computed once and
mirrored, so the result is exactly symmetric.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.validation import (
    check_array,
    check_2d,
    check_rectangular,
    check_min_samples,
)
from pycovariance.core.exceptions import DimensionError


def as_sample_matrix(
    s: ArrayLike,
    name: str = 's',
    n_variables: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Validate an n x p sample matrix. 1D input is one variable, shape (n, 1).

    Raises:
        DimensionError: If rows are ragged or p differs from n_variables
    """
    check_rectangular(s, name, n_columns=n_variables)
    data = check_array(s, name)
    if data.ndim == 1:
        data = data.reshape(-1, 1)
    check_2d(data, name)

    if n_variables is not None and data.shape[1] != n_variables:
        raise DimensionError(
            f"{name}: expected {n_variables} columns, got {data.shape[1]}",
            expected=n_variables,
            actual=data.shape[1],
        )
    return data


def column_means(s: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """First pass: per-column means, shape (p,)."""
    return s.mean(axis=0)


def centered_comoments(
    s: NDArray[np.floating[Any]],
    mean: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Second pass: sum of centered cross-products for each column pair.

    Returns the p x p co-moment matrix M with M[i, j] == M[j, i].
    """
    p = s.shape[1]
    centered = s - mean
    M = np.empty((p, p), dtype=np.float64)
    for i in range(p):
        ci = centered[:, i]
        for j in range(i, p):
            M[i, j] = M[j, i] = np.dot(ci, centered[:, j])
    return M


def two_pass_covar(
    s: ArrayLike,
    *,
    n_variables: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Sample covariance matrix of an n x p matrix (samples are rows).

    Parameters
    ----------
    s : array-like
        Sample matrix, n >= 2 rows of p columns. 1D input is treated as
        a single variable.
    n_variables : int, optional
        Declared number of columns. Every row must have exactly this many.

    Returns
    -------
    ndarray, shape (p, p)
        Bessel-corrected covariance matrix, exactly symmetric.

    Raises
    ------
    InsufficientSamplesError
        If n < 2.
    DimensionError
        If rows are ragged or the column count differs from n_variables.
    """
    data = as_sample_matrix(s, 's', n_variables)
    n = data.shape[0]
    check_min_samples(n, 's')

    mean = column_means(data)
    return centered_comoments(data, mean) / (n - 1)
