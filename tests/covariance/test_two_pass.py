"""
Tests for two_pass_cov(): covariance matrix of a sample matrix.
"""

import numpy as np
import pytest

from pycovariance.core.compute.tolerances import CPU_FP64
from pycovariance.core.exceptions import DimensionError, InsufficientSamplesError
from pycovariance.covariance import two_pass_cov, online_cov, CovarianceDesign


class TestTwoPassBasic:

    def test_bessel_correction(self):
        data = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        expected = np.cov(data, rowvar=False, ddof=1)
        np.testing.assert_allclose(two_pass_cov(data), expected, rtol=1e-12)

    def test_matches_numpy(self, sample_matrix):
        expected = np.cov(sample_matrix, rowvar=False)
        np.testing.assert_allclose(
            two_pass_cov(sample_matrix), expected, rtol=CPU_FP64.rtol, atol=CPU_FP64.atol
        )

    def test_exactly_symmetric(self, sample_matrix):
        C = two_pass_cov(sample_matrix)
        np.testing.assert_array_equal(C, C.T)

    def test_diagonal_equals_variance(self, sample_matrix):
        C = two_pass_cov(sample_matrix)
        np.testing.assert_allclose(
            np.diag(C), np.var(sample_matrix, axis=0, ddof=1), rtol=1e-12
        )

    def test_off_diagonal_matches_online(self, sample_matrix):
        C = two_pass_cov(sample_matrix)
        np.testing.assert_allclose(
            C[0, 1], online_cov(sample_matrix[:, 0], sample_matrix[:, 1]), rtol=1e-10
        )

    def test_single_column(self):
        data = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        C = two_pass_cov(data)
        assert C.shape == (1, 1)
        np.testing.assert_allclose(C[0, 0], 2.5, rtol=1e-12)

    def test_nested_lists(self):
        C = two_pass_cov([[1, 2], [2, 4], [3, 6], [4, 8]])
        np.testing.assert_allclose(C[0, 1], 10.0 / 3.0, rtol=1e-12)

    def test_design_input(self, sample_matrix):
        design = CovarianceDesign.from_array(sample_matrix)
        np.testing.assert_array_equal(two_pass_cov(design), two_pass_cov(sample_matrix))

    def test_declared_width_matches(self, sample_matrix):
        C = two_pass_cov(sample_matrix, n_variables=4)
        assert C.shape == (4, 4)


class TestTwoPassStability:

    def test_large_offset(self, offset_matrix):
        base = two_pass_cov(offset_matrix - 1e9)
        shifted = two_pass_cov(offset_matrix)
        np.testing.assert_allclose(shifted, base, rtol=1e-6, atol=1e-6)


class TestTwoPassErrors:

    def test_single_row(self):
        with pytest.raises(InsufficientSamplesError):
            two_pass_cov([[1.0, 2.0, 3.0]])

    def test_ragged_rows(self):
        with pytest.raises(DimensionError, match="row 2"):
            two_pass_cov([[1.0, 2.0], [3.0, 4.0], [5.0]])

    def test_scalar_row(self):
        with pytest.raises(DimensionError, match="row 2 has 0 columns"):
            two_pass_cov([[1.0, 2.0], [3.0, 4.0], 5.0])

    def test_declared_width_mismatch(self, sample_matrix):
        with pytest.raises(DimensionError, match="expected 3 columns"):
            two_pass_cov(sample_matrix, n_variables=3)

    def test_declared_width_mismatch_lists(self):
        with pytest.raises(DimensionError):
            two_pass_cov([[1.0, 2.0], [3.0, 4.0]], n_variables=3)

    def test_3d_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            two_pass_cov(np.zeros((3, 2, 2)))

    def test_nan_propagates(self):
        data = np.array([[1.0, np.nan], [3.0, 4.0], [5.0, 6.0]])
        C = two_pass_cov(data)
        assert np.isnan(C[0, 1])
        assert np.isnan(C[1, 0])
        np.testing.assert_allclose(C[0, 0], 4.0, rtol=1e-12)
