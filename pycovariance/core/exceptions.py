"""
Exception hierarchy for PyCovariance.

All exceptions inherit from CovarianceError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Validation errors are raised before any computation starts
"""


class CovarianceError(Exception):
    """Base exception for all PyCovariance errors."""
    pass


class ValidationError(CovarianceError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when vectors have different lengths or when a matrix does not
    have the declared number of columns.

    Attributes:
        expected: Expected length / column count, if known
        actual: Observed length / column count, if known
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InsufficientSamplesError(ValidationError):
    """
    Too few observations for the requested statistic.

    Sample variance and covariance are undefined with fewer than two
    observations.

    Attributes:
        n_samples: Number of observations received
        min_samples: Minimum number required
    """

    def __init__(
        self,
        message: str,
        n_samples: int | None = None,
        min_samples: int = 2
    ):
        super().__init__(message)
        self.n_samples = n_samples
        self.min_samples = min_samples


class ShapeError(DimensionError):
    """
    Combiner inputs do not line up.

    Raised when the number of partial matrices, sample counts and mean
    vectors differ, or when a partial matrix is not square, not symmetric,
    or has a different number of variables than the others.

    Attributes:
        shape: Offending shape, if applicable
        index: Index of the offending partition, if applicable
    """

    def __init__(
        self,
        message: str,
        shape: tuple[int, ...] | None = None,
        index: int | None = None,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message, expected=expected, actual=actual)
        self.shape = shape
        self.index = index
