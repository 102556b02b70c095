"""
Tests for CovarianceAccumulator: chunked streaming covariance.
"""

import numpy as np
import pytest

from pycovariance.core.exceptions import (
    DimensionError,
    InsufficientSamplesError,
    ValidationError,
)
from pycovariance.covariance import (
    CovarianceAccumulator,
    CovarianceDesign,
    combine,
    two_pass_cov,
)


class TestAccumulatorStreaming:

    @pytest.mark.parametrize("chunk_size", [1, 7, 50, 200, 1000])
    def test_chunks_match_direct(self, sample_matrix, chunk_size):
        acc = CovarianceAccumulator(n_variables=4)
        for start in range(0, sample_matrix.shape[0], chunk_size):
            acc.update(sample_matrix[start:start + chunk_size])
        assert acc.n == 200
        np.testing.assert_allclose(acc.covariance, two_pass_cov(sample_matrix), rtol=1e-9, atol=1e-12)
        np.testing.assert_allclose(acc.mean, sample_matrix.mean(axis=0), rtol=1e-12, atol=1e-12)

    def test_one_d_chunk_is_a_row(self, sample_matrix):
        acc = CovarianceAccumulator(n_variables=4)
        for row in sample_matrix:
            acc.update(row)
        np.testing.assert_allclose(acc.covariance, two_pass_cov(sample_matrix), rtol=1e-9, atol=1e-12)

    def test_single_variable_column(self):
        acc = CovarianceAccumulator(n_variables=1)
        acc.update([1.0, 2.0])
        acc.update([3.0, 4.0])
        np.testing.assert_allclose(acc.covariance, [[5.0 / 3.0]], rtol=1e-12)

    def test_empty_chunk_ignored(self, sample_matrix):
        acc = CovarianceAccumulator(n_variables=4)
        acc.update(sample_matrix[:10])
        acc.update(np.empty((0, 4)))
        assert acc.n == 10

    def test_large_offset(self, offset_matrix):
        acc = CovarianceAccumulator(n_variables=3)
        for start in range(0, 500, 64):
            acc.update(offset_matrix[start:start + 64])
        np.testing.assert_allclose(
            acc.covariance, two_pass_cov(offset_matrix), rtol=1e-6, atol=1e-6
        )

    def test_reset(self, sample_matrix):
        acc = CovarianceAccumulator(n_variables=4)
        acc.update(sample_matrix)
        acc.reset()
        assert acc.n == 0
        np.testing.assert_array_equal(acc.mean, np.zeros(4))


class TestAccumulatorMerge:

    def test_workers_merge(self, sample_matrix):
        workers = [CovarianceAccumulator(n_variables=4) for _ in range(3)]
        for i, start in enumerate(range(0, 200, 25)):
            workers[i % 3].update(sample_matrix[start:start + 25])
        total = workers[0]
        total.merge(workers[1])
        total.merge(workers[2])
        assert total.n == 200
        np.testing.assert_allclose(total.covariance, two_pass_cov(sample_matrix), rtol=1e-9, atol=1e-12)

    def test_merge_into_empty(self, sample_matrix):
        src = CovarianceAccumulator(n_variables=4)
        src.update(sample_matrix)
        dst = CovarianceAccumulator(n_variables=4)
        dst.merge(src)
        np.testing.assert_allclose(dst.covariance, src.covariance, rtol=1e-14)
        # Independent state after merge
        dst.update(sample_matrix[:5])
        assert src.n == 200

    def test_merge_empty_warns(self, sample_matrix):
        acc = CovarianceAccumulator(n_variables=4)
        acc.update(sample_matrix)
        with pytest.warns(UserWarning, match="empty"):
            acc.merge(CovarianceAccumulator(n_variables=4))
        assert acc.n == 200

    def test_estimates_feed_combine(self, sample_matrix):
        a = CovarianceAccumulator(n_variables=4)
        b = CovarianceAccumulator(n_variables=4)
        a.update(sample_matrix[:120])
        b.update(sample_matrix[120:])
        sol = combine([a.estimate(), b.estimate()])
        np.testing.assert_allclose(sol.covariance_matrix, two_pass_cov(sample_matrix), rtol=1e-9, atol=1e-12)


class TestAccumulatorErrors:

    def test_wrong_width(self):
        acc = CovarianceAccumulator(n_variables=3)
        with pytest.raises(DimensionError, match="expected 3 columns"):
            acc.update(np.zeros((4, 2)))

    def test_merge_width_mismatch(self):
        with pytest.raises(DimensionError):
            CovarianceAccumulator(n_variables=3).merge(CovarianceAccumulator(n_variables=2))

    def test_covariance_needs_two_rows(self):
        acc = CovarianceAccumulator(n_variables=2)
        acc.update([1.0, 2.0])
        with pytest.raises(InsufficientSamplesError):
            acc.covariance

    def test_estimate_needs_one_row(self):
        with pytest.raises(InsufficientSamplesError):
            CovarianceAccumulator(n_variables=2).estimate()

    def test_invalid_width(self):
        with pytest.raises(ValidationError, match="n_variables"):
            CovarianceAccumulator(n_variables=0)


class TestCovarianceDesign:

    def test_from_array(self, sample_matrix):
        design = CovarianceDesign.from_array(sample_matrix)
        assert design.n == 200
        assert design.p == 4
        assert design.columns is None
        assert repr(design) == "CovarianceDesign(n=200, p=4)"

    def test_dataframe_like(self):
        class Frame:
            columns = ['x', 'y']
            values = np.array([[1.0, 2.0], [3.0, 5.0], [4.0, 4.0]])

        design = CovarianceDesign.from_array(Frame())
        assert design.columns == ('x', 'y')
        assert design.data.shape == (3, 2)

    def test_declared_width(self):
        with pytest.raises(DimensionError):
            CovarianceDesign.from_array(np.zeros((3, 2)), n_variables=4)
