"""
Combination of partial covariance estimates.

Each partition contributes (n_k, mean_k, C_k). Partitions are merged two
at a time on co-moment matrices M_k = (n_k - 1) * C_k:

    n     = n_a + n_b
    delta = mean_b - mean_a
    mean  = mean_a + delta * n_b / n
    M     = M_a + M_b + outer(delta, delta) * n_a * n_b / n

and the combined covariance is M / (n - 1). The merge is associative and
commutative up to floating-point rounding.

Reference:
    Chan, T. F., Golub, G. H., & LeVeque, R. J. (1979). "Updating formulae
    and a pairwise algorithm for computing sample variances."
"""

from __future__ import annotations

from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.exceptions import ShapeError
from pycovariance.core.validation import (
    check_array,
    check_counts,
    check_min_samples,
    check_square,
    check_symmetric,
)

Moments = tuple[int, NDArray[np.floating[Any]], NDArray[np.floating[Any]]]


def to_comoment(n: int, covariance: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """(n - 1) * C. A single observation carries a zero co-moment."""
    if n < 2:
        return np.zeros_like(covariance)
    return (n - 1) * covariance


def merge_moments(a: Moments, b: Moments) -> Moments:
    """
    Merge two (n, mean, comoment) triples into the triple of their union.

    Parameters
    ----------
    a, b : tuple
        (n, mean vector of shape (p,), co-moment matrix of shape (p, p)).

    Returns
    -------
    tuple
        (n, mean, comoment) of the concatenated partitions.
    """
    n_a, mean_a, m_a = a
    n_b, mean_b, m_b = b
    n = n_a + n_b
    delta = mean_b - mean_a
    mean = mean_a + delta * (n_b / n)
    comoment = m_a + m_b + np.outer(delta, delta) * (n_a * n_b / n)
    return n, mean, comoment


def _as_matrix(c: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    # A scalar is the 1x1 covariance of a single variable
    arr = check_array(c, name)
    if arr.ndim == 0:
        return arr.reshape(1, 1)
    return arr


def validate_partials(
    covariances: ArrayLike | Sequence[ArrayLike],
    ns: ArrayLike,
    means: ArrayLike | Sequence[ArrayLike],
) -> tuple[list[NDArray[np.floating[Any]]], NDArray[np.int64], list[NDArray[np.floating[Any]]]]:
    """
    Validate combiner inputs in full before any merging starts.

    Raises:
        ShapeError: Counts, means and matrices do not line up, or a matrix
            is not p x p / not symmetric
        ValidationError: A count is not a positive whole number
        InsufficientSamplesError: Total sample count < 2
    """
    if isinstance(covariances, np.ndarray) and covariances.ndim == 2:
        covariances = [covariances]
    covs = [_as_matrix(c, f'covariances[{k}]') for k, c in enumerate(covariances)]
    counts = check_counts(ns, 'ns')

    if isinstance(means, np.ndarray) and means.ndim == 1 and len(covs) == 1:
        means = [means]
    mean_vecs = [check_array(m, f'means[{k}]').reshape(-1) if np.ndim(m) == 0
                 else check_array(m, f'means[{k}]')
                 for k, m in enumerate(means)]

    k = len(covs)
    if k == 0:
        raise ShapeError("covariances: at least one partial matrix is required", expected=1, actual=0)
    if counts.shape[0] != k:
        raise ShapeError(
            f"ns: {counts.shape[0]} sample counts for {k} partial matrices",
            expected=k,
            actual=counts.shape[0],
        )
    if len(mean_vecs) != k:
        raise ShapeError(
            f"means: {len(mean_vecs)} mean vectors for {k} partial matrices",
            expected=k,
            actual=len(mean_vecs),
        )

    check_square(covs[0], 'covariances[0]', index=0)
    p = covs[0].shape[0]
    for idx, (c, m) in enumerate(zip(covs, mean_vecs)):
        check_square(c, f'covariances[{idx}]', p=p, index=idx)
        if counts[idx] >= 2:
            check_symmetric(c, f'covariances[{idx}]', index=idx)
        if m.ndim != 1 or m.shape[0] != p:
            raise ShapeError(
                f"means[{idx}]: expected shape ({p},), got {m.shape}",
                shape=m.shape,
                index=idx,
                expected=p,
            )

    check_min_samples(int(counts.sum()), 'ns (total)')
    return covs, counts, mean_vecs


def combine_moments(
    covs: Sequence[NDArray[np.floating[Any]]],
    counts: Sequence[int],
    means: Sequence[NDArray[np.floating[Any]]],
) -> Moments:
    """Reduce validated partials left to right into a single (n, mean, comoment)."""
    # Copy the seed mean so a single-partition result never aliases caller input
    state: Moments = (int(counts[0]), means[0].copy(), to_comoment(int(counts[0]), covs[0]))
    for c, n_k, m in zip(covs[1:], counts[1:], means[1:]):
        n_k = int(n_k)
        state = merge_moments(state, (n_k, m, to_comoment(n_k, c)))
    return state


def combine_cov_estimates(
    covariances: ArrayLike | Sequence[ArrayLike],
    ns: ArrayLike,
    means: ArrayLike | Sequence[ArrayLike],
) -> NDArray[np.floating[Any]]:
    """
    Combine per-partition covariance matrices into the covariance of the union.

    Parameters
    ----------
    covariances : sequence of (p, p) arrays, or (k, p, p) array
        Bessel-corrected covariance of each partition.
    ns : array-like of int, shape (k,)
        Sample count of each partition.
    means : sequence of (p,) arrays, or (k, p) array
        Column means of each partition.

    Returns
    -------
    ndarray, shape (p, p)
        Covariance matrix equal (up to rounding) to a direct two-pass
        computation over all partitions' rows.
    """
    covs, counts, mean_vecs = validate_partials(covariances, ns, means)
    n, _, comoment = combine_moments(covs, counts, mean_vecs)
    return comoment / (n - 1)
