"""
Overlap analysis module for rbo-metric.

This module provides:
- Tracker: incremental overlap bookkeeping between two rankings
- Metrics: RBO_min, RBO_res and RBO_ext scores
- Report generation: HTML reports of a single comparison
"""

from .metrics import (
    rank_biased_overlap,
    rbo_ext,
    rbo_min,
    rbo_res,
    score_tracker,
)
from .report import generate_overlap_report
from .tracker import OverlapTracker

__all__ = [
    "OverlapTracker",
    "rank_biased_overlap",
    "rbo_min",
    "rbo_res",
    "rbo_ext",
    "score_tracker",
    "generate_overlap_report",
]
