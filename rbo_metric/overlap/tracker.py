"""
Incremental overlap bookkeeping for Rank-Biased Overlap.

The overlap at the next depth follows from the overlap at the current one:

    X_{d+1} = X_d + I(S_{d+1} in T_{1:d+1}) + I(T_{d+1} in S_{1:d+1})

so a single lookup set of elements seen exactly once is enough. When an
element shows up the second time (once from each ranking) the overlap grows
by one and the element is dropped from the set for good.
"""
from typing import Any, List, Set

from ..types.types import Item, OverlapProfile
from ..utils.validation import validate_persistence

_EXHAUSTED: Any = object()


class OverlapTracker:
    """
    Running overlap state for a pair of rankings.

    Feed aligned pairs with ``update(a, b)`` while both rankings have
    elements, then the remainder of the longer ranking with ``update(a)``.
    Rankings are expected to be free of duplicates.

    Attributes:
        persistence: The p value the scores will be computed with
        depth_short: Number of aligned depths seen (length of the shorter ranking)
        depth_long: Total depths seen (length of the longer ranking)
    """

    def __init__(self, p: float):
        self.persistence = validate_persistence(p)
        self.depth_short = 0
        self.depth_long = 0
        self._seen: Set[Item] = set()
        self._overlap = 0
        self._profile: OverlapProfile = []

    @property
    def overlap(self) -> int:
        """Current overlap X_d."""
        return self._overlap

    @property
    def overlap_profile(self) -> OverlapProfile:
        """X_d for every depth seen so far, starting at depth 1."""
        return list(self._profile)

    @property
    def agreements(self) -> List[float]:
        """A_d = X_d / d for every depth seen so far."""
        return [x / d for d, x in enumerate(self._profile, start=1)]

    def update(self, first: Item, second: Item = _EXHAUSTED) -> int:
        """
        Advance one depth.

        Args:
            first: Element at the next depth of one ranking
            second: Element at the same depth of the other ranking; omit
                once the shorter ranking is exhausted

        Returns:
            The overlap at the new depth

        Raises:
            ValueError: If an aligned pair follows a single-element update
        """
        if second is _EXHAUSTED:
            # only the longer ranking is left; nothing it reveals can match later
            if first in self._seen:
                self._seen.remove(first)
                self._overlap += 1
        else:
            if self.depth_long > self.depth_short:
                raise ValueError("Cannot add an aligned pair after a ranking was exhausted")
            self.depth_short += 1
            if first == second:
                self._overlap += 1
            else:
                for item in (first, second):
                    if item in self._seen:
                        self._seen.remove(item)
                        self._overlap += 1
                    else:
                        self._seen.add(item)

        self.depth_long += 1
        self._profile.append(self._overlap)
        return self._overlap
