"""
Logging configuration for rbo-metric.

This module provides centralized logging configuration with structured logging,
appropriate log levels, and consistent formatting across all modules.
"""

import copy
import json
import logging
import logging.config
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Generator, Optional

# Context variables for structured logging
comparison_id: ContextVar[Optional[str]] = ContextVar("comparison_id", default=None)


class StructuredLogger:
    """Enhanced logger with structured logging capabilities."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def _get_context(self) -> Dict[str, Any]:
        context = {}
        if comparison_id.get():
            context["comparison_id"] = comparison_id.get()
        return context

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with structured data."""
        self._log("INFO", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with structured data."""
        self._log("ERROR", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with structured data."""
        self._log("WARNING", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with structured data."""
        self._log("DEBUG", message, **kwargs)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        context = self._get_context()
        if kwargs:
            context.update(kwargs)

        if context:
            extra = {"structured_data": context}
            getattr(self.logger, level.lower())(
                f"{message} | {json.dumps(context, default=str)}", extra=extra
            )
        else:
            getattr(self.logger, level.lower())(message)


class RBOLogger:
    """Centralized logger configuration for rbo-metric."""

    # Environment-specific configurations
    ENV_CONFIGS = {
        "development": {"level": "DEBUG", "json_format": False},
        "testing": {"level": "DEBUG", "json_format": False},
        "production": {"level": "WARNING", "json_format": True},
    }

    # Default logging configuration
    DEFAULT_CONFIG: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s - %(name)s - %(message)s"},
            "json": {
                "format": '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "simple",
                "stream": "ext://sys.stderr",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": "logs/rbo_metric.log",
                "maxBytes": 10 * 1024 * 1024,  # 10MB
                "backupCount": 5,
            },
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
        "loggers": {
            "rbo_metric": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }

    _configured = False

    @classmethod
    def configure_for_environment(cls, environment: str = "development") -> None:
        """Configure logging based on environment."""
        if environment not in cls.ENV_CONFIGS:
            raise ValueError(f"Unknown environment: {environment}")

        cls.configure(**cls.ENV_CONFIGS[environment])

    @classmethod
    def configure(
        cls,
        level: str = "WARNING",
        log_file: Optional[str] = None,
        json_format: bool = False,
        fmt: Optional[str] = None,
        force: bool = False,
    ) -> None:
        """
        Configure logging for rbo-metric.

        Args:
            level: Package logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file (if None, only console logging)
            json_format: Whether to use JSON format for logs
            fmt: Format string for the console formatter
            force: Reconfigure even if logging was already configured
        """
        if cls._configured and not force:
            return

        config = copy.deepcopy(cls.DEFAULT_CONFIG)

        config["loggers"]["rbo_metric"]["level"] = level.upper()

        if fmt:
            config["formatters"]["simple"]["format"] = fmt

        if log_file:
            config["handlers"]["file"]["filename"] = log_file
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            config["loggers"]["rbo_metric"]["handlers"].append("file")
        else:
            del config["handlers"]["file"]

        if json_format:
            for handler_config in config["handlers"].values():
                handler_config["formatter"] = "json"

        logging.config.dictConfig(config)
        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger for the given name.

        Loggers are plain ``logging`` loggers; handlers are attached only
        once ``configure`` runs, so library use stays silent by default.
        """
        return logging.getLogger(name)

    @classmethod
    def get_structured_logger(cls, name: str) -> StructuredLogger:
        """Get a structured logger instance."""
        return StructuredLogger(name)


@contextmanager
def logging_context(**kwargs: Any) -> Generator[None, None, None]:
    """Context manager for setting logging context variables."""
    tokens = {}
    for key, value in kwargs.items():
        context_var = globals().get(key)
        if isinstance(context_var, ContextVar):
            tokens[key] = context_var.set(value)

    try:
        yield
    finally:
        for key, token in tokens.items():
            globals()[key].reset(token)


def get_logger(name: str) -> logging.Logger:
    """
    Convenience function to get a logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return RBOLogger.get_logger(name)


def get_structured_logger(name: str) -> StructuredLogger:
    """Convenience function to get a structured logger."""
    return RBOLogger.get_structured_logger(name)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False,
    environment: Optional[str] = None,
    fmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Package logging level
        log_file: Path to log file
        json_format: Whether to use JSON format
        environment: Environment name (development, testing, production)
        fmt: Console format string
        force: Reconfigure even if already configured
    """
    if environment:
        RBOLogger.configure_for_environment(environment)
    else:
        RBOLogger.configure(
            level=level, log_file=log_file, json_format=json_format, fmt=fmt, force=force
        )
