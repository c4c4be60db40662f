"""
Validation utilities.

This module provides the persistence parameter check used by the overlap
tracker, schema validation for configuration, and environment variable
merging.
"""
import collections.abc
import math
import numbers
import os
from dataclasses import Field
from typing import Any, Dict, Set, Type, TypeVar, Union, cast, get_args, get_type_hints

from omegaconf import DictConfig, OmegaConf

from ..types.types import ConfigurationError, InvalidParameterError, OutputFormat

T = TypeVar("T")  # Generic type for config classes

OUTPUT_FORMATS = get_args(OutputFormat)

# Cache type hints to avoid repeated lookups
_TYPE_HINTS_CACHE: Dict[Type, Dict[str, Any]] = {}


def validate_persistence(p: Any) -> float:
    """
    Check that ``p`` lies in the open interval (0, 1).

    Args:
        p: Candidate persistence value

    Returns:
        ``p`` as a float

    Raises:
        InvalidParameterError: If p is not a real number strictly between 0 and 1
    """
    if isinstance(p, bool) or not isinstance(p, numbers.Real):
        raise InvalidParameterError(
            f"Persistence p must be a real number, got {type(p).__name__}",
            context={"p": repr(p)},
        )
    try:
        value = float(p)
    except OverflowError as e:
        raise InvalidParameterError(
            "Persistence p must satisfy 0 < p < 1, got a value too large for a float",
            context={"p": repr(p)},
            cause=e,
        )
    if math.isnan(value) or not 0.0 < value < 1.0:
        raise InvalidParameterError(
            f"Persistence p must satisfy 0 < p < 1, got {value}",
            context={"p": value},
        )
    return value


def _get_cached_type_hints(schema_cls: Type) -> Dict[str, Any]:
    if schema_cls not in _TYPE_HINTS_CACHE:
        _TYPE_HINTS_CACHE[schema_cls] = get_type_hints(schema_cls)
    return _TYPE_HINTS_CACHE[schema_cls]


def validate_config(config: DictConfig, schema_cls: Type[T]) -> None:
    """
    Validate a configuration against its schema.

    Args:
        config: Configuration to validate
        schema_cls: Schema class to validate against

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        if not hasattr(schema_cls, "__dataclass_fields__"):
            raise ConfigurationError(f"{schema_cls.__name__} is not a dataclass")

        schema_fields = cast(Dict[str, Field], getattr(schema_cls, "__dataclass_fields__"))
        type_hints = _get_cached_type_hints(schema_cls)

        missing_fields: Set[str] = {f for f in schema_fields if f not in config}
        if missing_fields:
            raise ConfigurationError(
                f"Missing required configuration fields: {', '.join(sorted(missing_fields))}"
            )

        for field_name, field_type in type_hints.items():
            validate_field(field_name, config[field_name], field_type)

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Configuration validation failed: {e!s}", cause=e)


def validate_field(name: str, value: Any, expected_type: Any) -> None:
    """
    Validate a single configuration field.

    Args:
        name: Field name
        value: Field value
        expected_type: Expected type annotation

    Raises:
        ConfigurationError: If validation fails
    """
    # Handle Optional types
    if getattr(expected_type, "__origin__", None) is Union:
        if type(None) in expected_type.__args__:
            if value is None:
                return
            non_none_types = tuple(t for t in expected_type.__args__ if t is not type(None))
            expected_type = non_none_types[0] if len(non_none_types) == 1 else non_none_types

    # Nested configs
    if hasattr(expected_type, "__dataclass_fields__"):
        if not isinstance(value, collections.abc.Mapping):
            raise ConfigurationError(f"Field '{name}' must be a mapping")
        validate_config(cast(DictConfig, value), expected_type)
        return

    if expected_type is Any:
        return

    # ints are acceptable where floats are expected
    if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
        return

    if not isinstance(value, expected_type):
        raise ConfigurationError(
            f"Field '{name}' has invalid type. Expected {expected_type}, got {type(value)}"
        )


def validate_settings(config: DictConfig) -> None:
    """
    Check value ranges that the schema types alone cannot express.

    Raises:
        ConfigurationError: If persistence, precision or output format is out of range
    """
    try:
        validate_persistence(config.persistence)
    except InvalidParameterError as e:
        raise ConfigurationError(f"Invalid default persistence: {e.message}", cause=e)

    if config.precision < 0:
        raise ConfigurationError(f"precision must be non-negative, got {config.precision}")

    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unknown output format '{config.output_format}'. "
            f"Expected one of: {', '.join(OUTPUT_FORMATS)}"
        )


def _coerce_env_value(env_value: str) -> Union[bool, int, float, str]:
    if env_value.lower() in ("true", "false"):
        return env_value.lower() == "true"
    try:
        return int(env_value)
    except ValueError:
        pass
    try:
        return float(env_value)
    except ValueError:
        return env_value


def merge_with_env_vars(config: DictConfig, prefix: str = "RBO") -> DictConfig:
    """
    Merge configuration with environment variables.

    Environment variables override config values using the format:
    {PREFIX}_{PATH}={VALUE}, with ``__`` separating nested keys.

    Example:
        RBO_PERSISTENCE=0.95
        RBO_LOGGING__LEVEL=DEBUG

    Args:
        config: Base configuration
        prefix: Environment variable prefix

    Returns:
        Updated configuration
    """
    reserved = {f"{prefix}_CONFIG_FILE"}
    try:
        config = cast(DictConfig, OmegaConf.create(OmegaConf.to_container(config)))

        env_vars = {
            k: v for k, v in os.environ.items() if k.startswith(f"{prefix}_") and k not in reserved
        }

        for env_key, env_value in env_vars.items():
            config_path = env_key[len(prefix) + 1 :].lower().replace("__", ".")
            OmegaConf.update(config, config_path, _coerce_env_value(env_value))

        return config

    except Exception as e:
        raise ConfigurationError(f"Failed to merge environment variables: {e!s}", cause=e)
