"""
Input validation utilities for PyCovariance.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - NaN/Inf are data, not errors: they propagate through the arithmetic
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import issymmetric

from pycovariance.core.compute.tolerances import SYMMETRY, ToleranceTier
from pycovariance.core.exceptions import (
    ValidationError,
    DimensionError,
    InsufficientSamplesError,
    ShapeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types, ragged rows or
    non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    # Accumulators run in double precision regardless of the input width
    return result.astype(np.float64, copy=False)


def check_rectangular(rows: Any, name: str, n_columns: int | None = None) -> None:
    """
    Verify a nested row sequence has the same number of columns in every row.

    numpy arrays are rectangular by construction; the check matters for
    lists of rows, where a short row would otherwise surface as an opaque
    conversion error.

    Args:
        rows: Row sequence (list of lists, tuple of tuples, ...)
        name: Parameter name for error messages
        n_columns: Declared column count. Defaults to the first row's length.

    Raises:
        DimensionError: If a row's length differs from the declared count
    """
    if isinstance(rows, np.ndarray) or not isinstance(rows, Sequence):
        return
    if len(rows) == 0:
        return

    first = rows[0]
    if not isinstance(first, Sequence) and not isinstance(first, np.ndarray):
        return

    expected = len(first) if n_columns is None else n_columns
    for i, row in enumerate(rows):
        # A bare scalar where a row belongs has no columns
        actual = len(row) if isinstance(row, (Sequence, np.ndarray)) else 0
        if actual != expected:
            raise DimensionError(
                f"{name}: row {i} has {actual} columns, expected {expected}",
                expected=expected,
                actual=actual,
            )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(
            f"Inconsistent lengths: {details}",
            expected=lengths[0],
            actual=next(n for n in lengths if n != lengths[0]),
        )


def check_min_samples(n: int, name: str, min_samples: int = 2) -> None:
    """
    Verify a sample count reaches the minimum for a Bessel-corrected statistic.

    Args:
        n: Number of observations
        name: Parameter name for error messages
        min_samples: Minimum required observations

    Raises:
        InsufficientSamplesError: If n < min_samples
    """
    if n < min_samples:
        raise InsufficientSamplesError(
            f"{name}: requires at least {min_samples} samples, got {n}",
            n_samples=n,
            min_samples=min_samples,
        )


def check_square(
    matrix: NDArray[np.floating[Any]],
    name: str,
    p: int | None = None,
    index: int | None = None,
) -> None:
    """
    Verify a matrix is square, and p x p when p is given.

    Raises:
        ShapeError: If the matrix is not 2D, not square, or has the wrong size
    """
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ShapeError(
            f"{name}: expected a square matrix, got shape {matrix.shape}",
            shape=matrix.shape,
            index=index,
        )
    if p is not None and matrix.shape[0] != p:
        raise ShapeError(
            f"{name}: expected {p}x{p} matrix, got {matrix.shape[0]}x{matrix.shape[1]}",
            shape=matrix.shape,
            index=index,
            expected=p,
            actual=matrix.shape[0],
        )


def check_symmetric(
    matrix: NDArray[np.floating[Any]],
    name: str,
    tolerance: ToleranceTier = SYMMETRY,
    index: int | None = None,
) -> None:
    """
    Verify a square matrix is symmetric within tolerance.

    NaN entries are compared as equal to their mirror when both are NaN,
    so a covariance matrix carrying propagated NaN still validates.

    Raises:
        ShapeError: If the matrix differs from its transpose
    """
    finite = np.isfinite(matrix)
    if np.all(finite):
        ok = issymmetric(matrix, atol=tolerance.atol, rtol=tolerance.rtol)
    else:
        ok = bool(np.all(finite == finite.T)) and np.allclose(
            matrix, matrix.T, rtol=tolerance.rtol, atol=tolerance.atol, equal_nan=True
        )
    if not ok:
        worst = float(np.nanmax(np.abs(matrix - matrix.T)))
        raise ShapeError(
            f"{name}: matrix is not symmetric (max |A - A.T| = {worst:.3g})",
            shape=matrix.shape,
            index=index,
        )


def check_counts(ns: ArrayLike, name: str) -> NDArray[np.int64]:
    """
    Validate per-partition sample counts.

    Counts may arrive as floats (as they do from numeric host arrays);
    they must still be whole, positive numbers.

    Returns:
        1D int64 array of counts

    Raises:
        DimensionError: If counts are not 1D
        ValidationError: If any count is non-integral or < 1
    """
    arr = check_array(ns, name)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    check_1d(arr, name)

    if not np.all(np.isfinite(arr)) or np.any(arr != np.round(arr)):
        raise ValidationError(f"{name}: sample counts must be whole numbers, got {arr.tolist()}")
    if np.any(arr < 1):
        bad = np.where(arr < 1)[0].tolist()
        raise ValidationError(f"{name}: sample counts must be >= 1 (entries {bad})")

    return arr.astype(np.int64)
