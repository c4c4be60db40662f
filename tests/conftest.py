"""
Shared pytest fixtures for rbo-metric tests.
"""
import os
from pathlib import Path
from typing import Callable, Generator, Sequence

import pytest

from rbo_metric.utils.config import ConfigManager

ALPHABET = list("abcdefghijklmnopqrstuvwxyz")


@pytest.fixture(autouse=True)
def reset_config_manager(monkeypatch) -> Generator[None, None, None]:
    """Reset ConfigManager singleton and RBO_* env vars between tests."""
    for key in list(os.environ):
        if key.startswith("RBO_"):
            monkeypatch.delenv(key, raising=False)
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def alphabet() -> list:
    return list(ALPHABET)


@pytest.fixture
def ranking_file(tmp_path: Path) -> Callable[[str, Sequence[str]], Path]:
    """Write a ranking to a newline-delimited file and return its path."""

    def _write(name: str, items: Sequence[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(items) + "\n")
        return path

    return _write


@pytest.fixture
def config_manager() -> ConfigManager:
    return ConfigManager.get_instance()
