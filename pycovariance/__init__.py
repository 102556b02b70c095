"""
PyCovariance: streaming and partitioned covariance estimation.

Numerically stable covariance statistics that never need the whole
dataset in memory at once: a single-pass online pairwise covariance,
a two-pass covariance matrix, and the parallel combination of partial
estimates computed on disjoint partitions of the rows.

Submodules:
    core: Exceptions, validation, result envelope, timing, tolerances
    covariance: Online, two-pass and combined covariance estimators
"""

__version__ = "0.1.0"

from pycovariance import covariance
from pycovariance.covariance import (
    online_cov,
    two_pass_cov,
    combine_cov,
    combine_packed,
    estimate,
    estimate_partitions,
    combine,
    PartialEstimate,
    CovarianceAccumulator,
    OnlineCovariance,
)

__all__ = [
    "__version__",
    "covariance",
    "online_cov",
    "two_pass_cov",
    "combine_cov",
    "combine_packed",
    "estimate",
    "estimate_partitions",
    "combine",
    "PartialEstimate",
    "CovarianceAccumulator",
    "OnlineCovariance",
]
