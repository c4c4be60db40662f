"""Type definitions for rbo-metric."""

from .types import (
    ConfigurationError,
    DataError,
    InvalidParameterError,
    Item,
    OutputFormat,
    OverlapProfile,
    Persistence,
    Ranking,
    RBOError,
    RBOResult,
    Score,
)

__all__ = [
    "Item",
    "Ranking",
    "Score",
    "Persistence",
    "OverlapProfile",
    "OutputFormat",
    "RBOResult",
    "RBOError",
    "InvalidParameterError",
    "ConfigurationError",
    "DataError",
]
