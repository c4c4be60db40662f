"""Utility functions and helpers for rbo-metric."""

from .config import ConfigManager, get_config
from .logging_config import (
    get_logger,
    get_structured_logger,
    logging_context,
    setup_logging,
)
from .schema import LoggingConfig, RBOConfig
from .validation import validate_persistence

__all__ = [
    # Configuration
    "ConfigManager",
    "get_config",
    "LoggingConfig",
    "RBOConfig",
    # Logging
    "get_logger",
    "get_structured_logger",
    "logging_context",
    "setup_logging",
    # Validation
    "validate_persistence",
]
