"""Shared pytest fixtures for calcline tests."""

from pathlib import Path

import pytest

from calcline.config import CalculatorConfig


@pytest.fixture
def config() -> CalculatorConfig:
    """Return the default configuration."""
    return CalculatorConfig()


@pytest.fixture
def tolerant_config() -> CalculatorConfig:
    """Return a configuration that accepts unmatched '('."""
    return CalculatorConfig(strict_parentheses=False)


@pytest.fixture
def write_toml(tmp_path: Path):
    """Write a calcline.toml into a temp dir and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "calcline.toml"
        path.write_text(content)
        return path

    return _write
