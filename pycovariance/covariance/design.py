"""
Data wrappers for covariance estimation.

CovarianceDesign wraps a validated sample matrix. PartialEstimate is the
sufficient statistic (n, mean, covariance) of one partition; two of them
merge into the estimate of their union without revisiting the rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycovariance.core.exceptions import ShapeError, ValidationError
from pycovariance.covariance._two_pass import (
    as_sample_matrix,
    column_means,
    centered_comoments,
)
from pycovariance.covariance._combine import merge_moments, to_comoment


@dataclass(frozen=True, eq=False)
class CovarianceDesign:
    """
    Design for covariance estimation.

    Wraps a data matrix (n observations x p variables). Immutable after
    construction.

    Construction:
        CovarianceDesign.from_array(data)
        CovarianceDesign.from_array(df)   # DataFrame-like: keeps column names
    """
    _data: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _columns: tuple[str, ...] | None

    @classmethod
    def from_array(cls, data, *, n_variables: int | None = None) -> CovarianceDesign:
        """
        Build CovarianceDesign from array-like data.

        Parameters
        ----------
        data : array-like
            1D or 2D data matrix. Objects with a .values attribute
            (pandas DataFrame) are unwrapped and their column names kept.
            1D input is reshaped to (n, 1).
        n_variables : int, optional
            Declared number of columns.
        """
        if hasattr(data, 'values') and not isinstance(data, np.ndarray):
            columns = tuple(str(c) for c in data.columns) if hasattr(data, 'columns') else None
            data = data.values
        else:
            columns = None

        data_array = as_sample_matrix(data, 'data', n_variables)
        n, p = data_array.shape
        if n < 1:
            raise ValidationError(f"Need at least 1 observation, got {n}")
        if p < 1:
            raise ValidationError(f"Need at least 1 variable, got {p}")

        return cls(_data=data_array, _n=n, _p=p, _columns=columns)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data matrix (n x p)."""
        return self._data

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of variables."""
        return self._p

    @property
    def columns(self) -> tuple[str, ...] | None:
        """Column names, or None if not available."""
        return self._columns

    def __repr__(self) -> str:
        return f"CovarianceDesign(n={self._n}, p={self._p})"


@dataclass(frozen=True, eq=False)
class PartialEstimate:
    """
    Covariance statistics of one partition.

    Attributes:
        n: Number of observations in the partition
        mean: Column means, shape (p,)
        covariance: Bessel-corrected covariance, shape (p, p). All NaN
            when n == 1.

    Estimates compare and hash by identity; compare their arrays with
    numpy when value equality is needed.
    """
    n: int
    mean: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]

    @classmethod
    def from_data(cls, s: ArrayLike | CovarianceDesign) -> PartialEstimate:
        """Two-pass estimate of a sample matrix. A single row is allowed."""
        data = s.data if isinstance(s, CovarianceDesign) else as_sample_matrix(s, 's')
        n, p = data.shape
        if n < 1:
            raise ValidationError(f"s: need at least 1 observation, got {n}")

        mean = column_means(data)
        if n == 1:
            return cls(n=1, mean=mean, covariance=np.full((p, p), np.nan))
        return cls(n=n, mean=mean, covariance=centered_comoments(data, mean) / (n - 1))

    @classmethod
    def from_moments(
        cls,
        n: int,
        mean: NDArray[np.floating[Any]],
        comoment: NDArray[np.floating[Any]],
    ) -> PartialEstimate:
        """Build from a co-moment matrix (sum of centered cross-products)."""
        if n < 2:
            return cls(n=n, mean=mean, covariance=np.full(comoment.shape, np.nan))
        return cls(n=n, mean=mean, covariance=comoment / (n - 1))

    @property
    def p(self) -> int:
        """Number of variables."""
        return self.mean.shape[0]

    @property
    def comoment(self) -> NDArray[np.floating[Any]]:
        """(n - 1) * covariance; zero for a single observation."""
        return to_comoment(self.n, self.covariance)

    def merge(self, other: PartialEstimate) -> PartialEstimate:
        """Estimate of the union of this partition and another one."""
        if other.p != self.p:
            raise ShapeError(
                f"Cannot merge estimates over {self.p} and {other.p} variables",
                expected=self.p,
                actual=other.p,
            )
        n, mean, comoment = merge_moments(
            (self.n, self.mean, self.comoment),
            (other.n, other.mean, other.comoment),
        )
        return PartialEstimate.from_moments(n, mean, comoment)

    def __repr__(self) -> str:
        return f"PartialEstimate(n={self.n}, p={self.p})"
