"""
Tests for PyCovariance exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via CovarianceError)
    - Diagnostic attributes on DimensionError, InsufficientSamplesError,
      ShapeError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pycovariance.core.exceptions import (
    CovarianceError,
    DimensionError,
    InsufficientSamplesError,
    ShapeError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via CovarianceError."""

    def test_validation_error_is_covariance_error(self):
        with pytest.raises(CovarianceError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong length")

    def test_insufficient_samples_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise InsufficientSamplesError("n=1")

    def test_shape_error_is_dimension_error(self):
        with pytest.raises(DimensionError):
            raise ShapeError("not square")

    def test_shape_error_is_covariance_error(self):
        with pytest.raises(CovarianceError):
            raise ShapeError("not square")

    def test_insufficient_samples_is_not_dimension_error(self):
        err = InsufficientSamplesError("n=1", n_samples=1)
        assert not isinstance(err, DimensionError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionError:

    def test_attributes(self):
        err = DimensionError("x1 has 3, x2 has 4", expected=3, actual=4)
        assert err.expected == 3
        assert err.actual == 4
        assert str(err) == "x1 has 3, x2 has 4"

    def test_defaults_none(self):
        err = DimensionError("mismatch")
        assert err.expected is None
        assert err.actual is None


class TestInsufficientSamplesError:

    def test_attributes(self):
        err = InsufficientSamplesError("need 2", n_samples=1)
        assert err.n_samples == 1
        assert err.min_samples == 2

    def test_custom_minimum(self):
        err = InsufficientSamplesError("need 5", n_samples=3, min_samples=5)
        assert err.min_samples == 5


class TestShapeError:

    def test_attributes(self):
        err = ShapeError("not square", shape=(2, 3), index=1)
        assert err.shape == (2, 3)
        assert err.index == 1
        assert err.expected is None

    def test_carries_expected_actual(self):
        err = ShapeError("count mismatch", expected=3, actual=2)
        assert err.expected == 3
        assert err.actual == 2
        assert err.shape is None
        assert err.index is None
