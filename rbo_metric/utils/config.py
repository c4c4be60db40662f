"""
Configuration management utilities for rbo-metric.
"""
import os
from pathlib import Path
from typing import Any, Optional, cast

from omegaconf import DictConfig, OmegaConf

from ..types.types import ConfigurationError
from .schema import RBOConfig
from .validation import merge_with_env_vars, validate_config, validate_settings

CONFIG_FILE_ENV = "RBO_CONFIG_FILE"


class ConfigManager:
    """Central configuration manager for rbo-metric with lazy loading."""

    _instance: Optional["ConfigManager"] = None
    _config: Optional[DictConfig] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _initialize_config(self) -> None:
        """Build configuration from schema defaults, an optional YAML file and env vars."""
        if self._initialized:
            return

        try:
            configs_to_merge = [OmegaConf.structured(RBOConfig)]

            config_file = os.environ.get(CONFIG_FILE_ENV)
            if config_file:
                config_path = Path(config_file)
                if not config_path.exists():
                    raise ConfigurationError(
                        f"Config file not found: {config_path}",
                        context={"path": str(config_path)},
                    )
                configs_to_merge.append(OmegaConf.load(config_path))

            merged_config = cast(DictConfig, OmegaConf.merge(*configs_to_merge))

            # Apply environment variable overrides
            merged_config = merge_with_env_vars(merged_config)

            validate_config(merged_config, RBOConfig)
            validate_settings(merged_config)

            OmegaConf.set_readonly(merged_config, True)
            self._config = merged_config
            self._initialized = True

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize configuration: {e!s}", cause=e)

    @property
    def config(self) -> DictConfig:
        """Get the full configuration (lazy loaded)."""
        if not self._initialized:
            self._initialize_config()
        if self._config is None:
            raise ConfigurationError("Configuration not initialized")
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Args:
            key: Dot-notation path to config value
            default: Default value if key doesn't exist

        Returns:
            Configuration value
        """
        return OmegaConf.select(self.config, key, default=default)

    def update(self, key: str, value: Any) -> None:
        """
        Update a configuration value.

        Args:
            key: Dot-notation path to config value
            value: New value to set

        Raises:
            ConfigurationError: If update fails
        """
        if key.startswith("_"):
            raise ConfigurationError("Cannot update protected configuration fields")

        current_value = self.get(key)
        if current_value is not None and not isinstance(value, type(current_value)):
            if not (isinstance(current_value, float) and isinstance(value, int)):
                raise ConfigurationError(
                    f"Type mismatch: Cannot update '{key}' of type {type(current_value)} "
                    f"with value of type {type(value)}"
                )

        try:
            mutable_config = cast(DictConfig, OmegaConf.create(OmegaConf.to_container(self.config)))
            OmegaConf.update(mutable_config, key, value, merge=True)
            validate_config(mutable_config, RBOConfig)
            validate_settings(mutable_config)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to update config key '{key}': {e!s}", cause=e)

        OmegaConf.set_readonly(mutable_config, True)
        self._config = mutable_config

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access reloads configuration."""
        cls._instance = None
        cls._config = None
        cls._initialized = False

    @staticmethod
    def get_instance() -> "ConfigManager":
        """Get the singleton instance of ConfigManager."""
        return ConfigManager()


def get_config() -> DictConfig:
    """Convenience accessor for the active configuration."""
    return ConfigManager.get_instance().config
