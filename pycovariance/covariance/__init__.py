"""
Covariance estimation module.

Streaming, two-pass and partitioned covariance estimators.

Public API:
    online_cov(x1, x2)              - Single-pass covariance of two sequences
    two_pass_cov(s)                 - Covariance matrix (two-pass, n-1)
    combine_cov(covs, ns, means)    - Merge partial covariance matrices
    combine_packed(mn_covs, ns)     - Merge packed (mean | covariance) rows
    estimate(s)                     - Partial estimate of one partition
    estimate_partitions(s, labels)  - Partial estimates per group label
    combine(estimates)              - Merge partial estimates into a solution
"""

from pycovariance.covariance._online import OnlineCovariance
from pycovariance.covariance._packed import pack_estimates, unpack_estimates
from pycovariance.covariance.accumulator import CovarianceAccumulator
from pycovariance.covariance.design import CovarianceDesign, PartialEstimate
from pycovariance.covariance.solution import CovarianceParams, CovarianceSolution
from pycovariance.covariance.solvers import (
    online_cov,
    two_pass_cov,
    combine_cov,
    combine_packed,
    estimate,
    estimate_partitions,
    combine,
)

__all__ = [
    "online_cov",
    "two_pass_cov",
    "combine_cov",
    "combine_packed",
    "estimate",
    "estimate_partitions",
    "combine",
    "pack_estimates",
    "unpack_estimates",
    "OnlineCovariance",
    "CovarianceAccumulator",
    "CovarianceDesign",
    "PartialEstimate",
    "CovarianceParams",
    "CovarianceSolution",
]
