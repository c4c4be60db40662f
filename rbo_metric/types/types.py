"""
Type system for rbo-metric.

This module provides the type aliases, the immutable result record and the
exception hierarchy shared by the overlap tracker, the configuration layer
and the command-line interface.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Hashable, List, Optional, Sequence

from typing_extensions import Literal, TypeAlias

# Type Aliases and Custom Types
Item: TypeAlias = Hashable  # Any hashable ranked element
Ranking: TypeAlias = Sequence[Item]  # Ordered ranking, best first
Score = float  # Type alias for scores
Persistence = float  # Type alias for the p parameter
OverlapProfile = List[int]  # X_d for d = 1..l

# Constants and Literals
OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RBOResult:
    """
    Immutable result of one Rank-Biased Overlap evaluation.

    Attributes:
        min: Lower bound on RBO given the observed prefixes (RBO_min)
        residual: Uncertainty mass of the unseen tail; min + residual is an upper bound
        extrapolated: Point estimate assuming the observed agreement continues (RBO_ext)
        persistence: The p value used
        depth_short: Length of the shorter ranking
        depth_long: Length of the longer ranking
        overlap: Final overlap X_l between the two rankings
    """

    min: Score
    residual: Score
    extrapolated: Score
    persistence: Persistence
    depth_short: int = 0
    depth_long: int = 0
    overlap: int = 0

    @property
    def upper(self) -> Score:
        """Upper bound on RBO (RBO_max)."""
        return self.min + self.residual

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return asdict(self)

    def format(self, precision: int = 3) -> str:
        return (
            f"RBO(min={self.min:.{precision}f}, "
            f"residual={self.residual:.{precision}f}, "
            f"extrapolated={self.extrapolated:.{precision}f})"
        )

    def __str__(self) -> str:
        return self.format()


# Exception Hierarchy
class RBOError(Exception):
    """Base exception class for rbo-metric."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


class InvalidParameterError(RBOError, ValueError):
    """
    Raised when the persistence parameter is outside the open interval (0, 1).

    Examples:
        - p = 0 or p = 1
        - negative p
        - NaN or non-numeric p
    """


class ConfigurationError(RBOError):
    """
    Raised when there's an issue with configuration.

    Examples:
        - Invalid config values
        - Config file not found
        - Unknown output format
    """


class DataError(RBOError):
    """Errors related to reading ranking input files."""

