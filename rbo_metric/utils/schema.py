"""
Configuration schemas for validation.
"""
from dataclasses import dataclass, field


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    format: str = "%(levelname)s - %(name)s - %(message)s"
    json_format: bool = False


@dataclass
class RBOConfig:
    persistence: float = 0.9
    precision: int = 3
    output_format: str = "text"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
