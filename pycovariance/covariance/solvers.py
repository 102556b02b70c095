"""
Public entry points for covariance estimation.

Plain-value functions online_cov(), two_pass_cov(), combine_cov() and
combine_packed() return floats and arrays. estimate() and
estimate_partitions() produce per-partition statistics, and combine()
merges them into a CovarianceSolution.
"""

from __future__ import annotations

from typing import Any, Hashable, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.result import Result
from pycovariance.core.compute.timing import Timer
from pycovariance.core.exceptions import DimensionError, ShapeError, ValidationError
from pycovariance.core.validation import check_1d
from pycovariance.covariance._online import online_covar
from pycovariance.covariance._two_pass import two_pass_covar
from pycovariance.covariance._combine import (
    combine_cov_estimates,
    combine_moments,
    validate_partials,
)
from pycovariance.covariance._packed import combine_packed as _combine_packed
from pycovariance.covariance.design import CovarianceDesign, PartialEstimate
from pycovariance.covariance.solution import CovarianceParams, CovarianceSolution


def online_cov(x1: ArrayLike, x2: ArrayLike) -> float:
    """
    Sample covariance of two sequences, computed in a single pass.

    Parameters
    ----------
    x1, x2 : array-like
        Equal-length 1D sequences, n >= 2.

    Returns
    -------
    float

    Raises
    ------
    DimensionError
        If the lengths differ.
    InsufficientSamplesError
        If n < 2.
    """
    return online_covar(x1, x2)


def two_pass_cov(
    s: ArrayLike | CovarianceDesign,
    *,
    n_variables: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Covariance matrix of an n x p sample matrix (two-pass, n-1 denominator).

    Parameters
    ----------
    s : array-like or CovarianceDesign
        Sample matrix with observations as rows.
    n_variables : int, optional
        Declared column count; rows of any other width are rejected.

    Returns
    -------
    ndarray, shape (p, p)
    """
    if isinstance(s, CovarianceDesign):
        s = s.data
    return two_pass_covar(s, n_variables=n_variables)


def combine_cov(
    covariances: ArrayLike | Sequence[ArrayLike],
    ns: ArrayLike,
    means: ArrayLike | Sequence[ArrayLike],
) -> NDArray[np.floating[Any]]:
    """
    Combine per-partition covariance matrices into that of the union.

    Parameters
    ----------
    covariances : sequence of (p, p) arrays
        Bessel-corrected covariance of each partition.
    ns : array-like of int
        Sample count of each partition.
    means : sequence of (p,) arrays
        Column means of each partition.

    Returns
    -------
    ndarray, shape (p, p)
    """
    return combine_cov_estimates(covariances, ns, means)


def combine_packed(mn_covs: ArrayLike, ns: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Combine packed partial estimates, one row per partition.

    Each row of mn_covs is the partition's mean vector followed by its
    covariance matrix flattened row-major (width p + p*p).
    """
    return _combine_packed(mn_covs, ns)


def estimate(s: ArrayLike | CovarianceDesign) -> PartialEstimate:
    """
    Partial estimate (n, mean, covariance) of one partition's rows.
    """
    return PartialEstimate.from_data(s)


def estimate_partitions(
    s: ArrayLike | CovarianceDesign,
    labels: ArrayLike,
) -> dict[Hashable, PartialEstimate]:
    """
    Per-group estimates of a sample matrix.

    Rows sharing a label (batch, plate, shard, ...) form one partition.
    The returned dict is ordered by first appearance of each label.

    Parameters
    ----------
    s : array-like or CovarianceDesign
        Sample matrix, n rows.
    labels : array-like, shape (n,)
        Group label of each row.

    Raises
    ------
    DimensionError
        If the number of labels differs from the number of rows.
    """
    design = s if isinstance(s, CovarianceDesign) else CovarianceDesign.from_array(s)
    label_arr = np.asarray(labels)
    check_1d(label_arr, 'labels')
    if label_arr.shape[0] != design.n:
        raise DimensionError(
            f"labels: {label_arr.shape[0]} labels for {design.n} rows",
            expected=design.n,
            actual=label_arr.shape[0],
        )

    _, first_index, inverse = np.unique(label_arr, return_index=True, return_inverse=True)
    inverse = inverse.reshape(-1)
    estimates: dict[Hashable, PartialEstimate] = {}
    for group in np.argsort(first_index, kind='stable'):
        rows = design.data[inverse == group]
        key = label_arr[first_index[group]]
        if isinstance(key, np.generic):
            key = key.item()
        estimates[key] = PartialEstimate.from_data(rows)
    return estimates


def combine(
    estimates: Sequence[PartialEstimate] | dict[Hashable, PartialEstimate],
    *,
    columns: Sequence[str] | None = None,
) -> CovarianceSolution:
    """
    Merge partial estimates into the covariance of their union.

    Parameters
    ----------
    estimates : sequence or dict of PartialEstimate
        One estimate per disjoint partition. Dict values are merged in
        insertion order.
    columns : sequence of str, optional
        Variable names for summary output.

    Returns
    -------
    CovarianceSolution with covariance_matrix, mean and n populated.

    Raises
    ------
    ShapeError
        If estimates disagree on the number of variables.
    InsufficientSamplesError
        If the estimates hold fewer than 2 observations in total.
    """
    if isinstance(estimates, dict):
        estimates = list(estimates.values())
    else:
        estimates = list(estimates)
    if not estimates:
        raise ShapeError("estimates: at least one partial estimate is required", expected=1, actual=0)
    for k, est in enumerate(estimates):
        if not isinstance(est, PartialEstimate):
            raise ValidationError(
                f"estimates[{k}]: expected PartialEstimate, got {type(est).__name__}"
            )
    p = estimates[0].p
    if columns is not None:
        columns = tuple(str(c) for c in columns)
        if len(columns) != p:
            raise DimensionError(
                f"columns: {len(columns)} names for {p} variables",
                expected=p,
                actual=len(columns),
            )

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    with timer.section('validation'):
        covs, counts, means = validate_partials(
            [e.covariance for e in estimates],
            [e.n for e in estimates],
            [e.mean for e in estimates],
        )
        for k, est in enumerate(estimates):
            if est.n == 1:
                warnings_list.append(
                    f"partition {k} has a single observation; it contributes its mean only"
                )
            elif not (np.all(np.isfinite(est.mean)) and np.all(np.isfinite(est.covariance))):
                warnings_list.append(
                    f"partition {k} contains non-finite values; they propagate to the result"
                )

    with timer.section('merge'):
        n, mean, comoment = combine_moments(covs, counts, means)

    with timer.section('finalize'):
        covariance_matrix = comoment / (n - 1)

    timer.stop()

    params = CovarianceParams(
        covariance_matrix=covariance_matrix,
        mean=mean,
        n=n,
        n_partitions=len(estimates),
        partition_n=counts,
    )
    result = Result(
        params=params,
        info={'method': 'chan', 'n_partitions': len(estimates), 'p': int(mean.shape[0])},
        timing=timer.result(),
        backend_name='cpu_chan',
        warnings=tuple(warnings_list),
    )
    return CovarianceSolution(_result=result, _columns=columns)
