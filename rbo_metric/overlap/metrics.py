"""
Rank-Biased Overlap scores.

Implements the RBO family from Webber, Moffat and Zobel, "A similarity
measure for indefinite rankings", ACM TOIS 2010: the lower bound RBO_min
(eq. 11), the residual RBO_res (eq. 30) and the extrapolated point
estimate RBO_ext (eq. 32).
"""
from typing import Iterable, List, Sequence

import numpy as np

from ..types.types import Item, RBOResult, Ranking, Score
from ..utils.logging_config import get_logger
from .tracker import OverlapTracker

logger = get_logger(__name__)

DEFAULT_PERSISTENCE = 0.9


def _depth_weights(p: float, depth: int) -> np.ndarray:
    """p^d / d for d = 1..depth."""
    depths = np.arange(1, depth + 1, dtype=np.float64)
    return np.power(p, depths) / depths


def _min_score(profile: Sequence[int], p: float) -> Score:
    if not profile:
        return 0.0
    # past the end of the shorter ranking X_d still counts matches from the longer one
    overlaps = np.asarray(profile, dtype=np.float64)
    x_k = overlaps[-1]
    weighted = np.sum((overlaps - x_k) * _depth_weights(p, len(profile)))
    return float((1.0 - p) / p * (weighted - x_k * np.log1p(-p)))


def _residual_score(depth_short: int, depth_long: int, x_l: int, p: float) -> Score:
    if depth_long == 0:
        # nothing observed, the whole mass is uncertain
        return 1.0
    s, l = depth_short, depth_long
    # depth at which the maximum agreement reaches 1
    f = s + l - x_l
    weights = _depth_weights(p, f)
    sum_s = np.sum(weights[s:])
    sum_l = np.sum(weights[l:])
    tail = -np.log1p(-p) - np.sum(weights)
    res = p**s + p**l - p**f - (1.0 - p) / p * (s * sum_s + l * sum_l + x_l * tail)
    return float(res)


def _extrapolated_score(profile: Sequence[int], depth_short: int, p: float) -> Score:
    if depth_short == 0:
        return 0.0
    s, l = depth_short, len(profile)
    overlaps = np.asarray(profile, dtype=np.float64)
    depths = np.arange(1, l + 1, dtype=np.float64)
    powers = np.power(p, depths)
    x_s, x_l = overlaps[s - 1], overlaps[l - 1]

    observed = np.sum(overlaps * powers / depths)
    # agreement of the shorter ranking carried on past its end
    tail_depths = depths[s:]
    carried = np.sum(x_s * (tail_depths - s) / (s * tail_depths) * powers[s:])
    head = ((x_l - x_s) / l + x_s / s) * p**l
    return float((1.0 - p) / p * (observed + carried) + head)


def score_tracker(tracker: OverlapTracker) -> RBOResult:
    """Compute all three scores from a fed tracker."""
    p = tracker.persistence
    profile = tracker.overlap_profile
    return RBOResult(
        min=_min_score(profile, p),
        residual=_residual_score(tracker.depth_short, tracker.depth_long, tracker.overlap, p),
        extrapolated=_extrapolated_score(profile, tracker.depth_short, p),
        persistence=p,
        depth_short=tracker.depth_short,
        depth_long=tracker.depth_long,
        overlap=tracker.overlap,
    )


def unique_ranking(ranking: Iterable[Item]) -> List[Item]:
    """Drop repeated elements, keeping each at its first rank."""
    return list(dict.fromkeys(ranking))


def track_overlap(first: Ranking, second: Ranking, p: float) -> OverlapTracker:
    """
    Run the overlap tracker over two rankings.

    Duplicates are removed first; a repeated element adds nothing to any
    prefix set, so only its first rank counts.
    """
    tracker = OverlapTracker(p)

    first_unique = unique_ranking(first)
    second_unique = unique_ranking(second)
    if len(first_unique) != len(first) or len(second_unique) != len(second):
        logger.debug(
            "Dropped duplicate elements: %d from first, %d from second",
            len(first) - len(first_unique),
            len(second) - len(second_unique),
        )

    short, long_ = sorted((first_unique, second_unique), key=len)
    for a, b in zip(long_, short):
        tracker.update(a, b)
    for item in long_[len(short) :]:
        tracker.update(item)
    return tracker


def rank_biased_overlap(
    first: Ranking, second: Ranking, p: float = DEFAULT_PERSISTENCE
) -> RBOResult:
    """
    Compute Rank-Biased Overlap between two rankings.

    The rankings may be of different lengths or empty. Both empty, or one
    empty, gives min 0, residual 1 and extrapolated 0.

    Args:
        first: First ranking, best first
        second: Second ranking, best first
        p: Persistence, 0 < p < 1

    Returns:
        RBOResult with min, residual and extrapolated scores

    Raises:
        InvalidParameterError: If p is not strictly between 0 and 1
    """
    tracker = track_overlap(first, second, p)
    result = score_tracker(tracker)
    logger.debug(
        "RBO p=%s depths=(%d, %d) overlap=%d -> %s",
        result.persistence,
        result.depth_short,
        result.depth_long,
        result.overlap,
        result,
    )
    return result


def rbo_min(first: Ranking, second: Ranking, p: float) -> Score:
    """Lower bound on RBO given the observed prefixes."""
    return rank_biased_overlap(first, second, p).min


def rbo_res(first: Ranking, second: Ranking, p: float) -> Score:
    """Residual uncertainty from the depths not observed."""
    return rank_biased_overlap(first, second, p).residual


def rbo_ext(first: Ranking, second: Ranking, p: float) -> Score:
    """Extrapolated RBO point estimate."""
    return rank_biased_overlap(first, second, p).extrapolated
