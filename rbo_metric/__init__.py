"""
rbo-metric: Rank-Biased Overlap for indefinite rankings.

This package computes the RBO similarity between two ranked lists that may
be incomplete or of unequal length, reporting the lower bound, the residual
uncertainty and the extrapolated point estimate.
"""

__version__ = "0.1.0"

from .overlap.metrics import rank_biased_overlap, rbo_ext, rbo_min, rbo_res  # noqa: F401
from .overlap.tracker import OverlapTracker  # noqa: F401
from .types.types import (  # noqa: F401
    ConfigurationError,
    DataError,
    InvalidParameterError,
    RBOError,
    RBOResult,
)

__all__ = [
    "__version__",
    "rank_biased_overlap",
    "rbo_min",
    "rbo_res",
    "rbo_ext",
    "OverlapTracker",
    "RBOResult",
    "RBOError",
    "InvalidParameterError",
    "ConfigurationError",
    "DataError",
]
