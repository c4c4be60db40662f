"""
Tests for configuration management system.
"""
import pytest
from omegaconf import OmegaConf

from rbo_metric.types.types import ConfigurationError
from rbo_metric.utils.config import ConfigManager, get_config


def test_config_manager_singleton(config_manager):
    """Test that ConfigManager follows singleton pattern."""
    another_instance = ConfigManager.get_instance()
    assert config_manager is another_instance
    assert ConfigManager() is config_manager


def test_config_defaults(config_manager):
    assert config_manager.get("persistence") == 0.9
    assert config_manager.get("precision") == 3
    assert config_manager.get("output_format") == "text"
    assert config_manager.get("logging.level") == "WARNING"


def test_config_default_values(config_manager):
    assert config_manager.get("nonexistent", "default") == "default"
    assert config_manager.get("some.nested.key", 123) == 123


def test_config_is_read_only(config_manager):
    with pytest.raises(Exception):
        config_manager.config.persistence = 0.5


def test_env_var_override(monkeypatch):
    monkeypatch.setenv("RBO_PERSISTENCE", "0.95")
    monkeypatch.setenv("RBO_LOGGING__LEVEL", "DEBUG")

    config = get_config()
    assert config.persistence == 0.95
    assert config.logging.level == "DEBUG"


def test_env_var_invalid_persistence(monkeypatch):
    monkeypatch.setenv("RBO_PERSISTENCE", "1.5")
    with pytest.raises(ConfigurationError):
        get_config()


def test_yaml_config_file(tmp_path, monkeypatch):
    config_file = tmp_path / "rbo.yaml"
    OmegaConf.save(OmegaConf.create({"persistence": 0.8, "output_format": "json"}), config_file)
    monkeypatch.setenv("RBO_CONFIG_FILE", str(config_file))

    config = get_config()
    assert config.persistence == 0.8
    assert config.output_format == "json"
    assert config.precision == 3


def test_missing_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("RBO_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    with pytest.raises(ConfigurationError):
        get_config()


def test_config_file_with_bad_format(tmp_path, monkeypatch):
    config_file = tmp_path / "rbo.yaml"
    OmegaConf.save(OmegaConf.create({"output_format": "xml"}), config_file)
    monkeypatch.setenv("RBO_CONFIG_FILE", str(config_file))

    with pytest.raises(ConfigurationError):
        get_config()


def test_config_update(config_manager):
    config_manager.update("persistence", 0.75)
    assert config_manager.get("persistence") == 0.75

    config_manager.update("logging.level", "INFO")
    assert config_manager.get("logging.level") == "INFO"


def test_config_update_rejects_invalid_values(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.update("persistence", 1.0)

    with pytest.raises(ConfigurationError):
        config_manager.update("precision", "three")

    with pytest.raises(ConfigurationError):
        config_manager.update("_private", 1)

    assert config_manager.get("persistence") == 0.9


def test_reset_reloads(monkeypatch, config_manager):
    assert config_manager.get("persistence") == 0.9
    monkeypatch.setenv("RBO_PERSISTENCE", "0.6")
    ConfigManager.reset()
    assert ConfigManager.get_instance().get("persistence") == 0.6
