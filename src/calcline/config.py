"""
Calculator configuration models.

Parses the [calculator] section from calcline.toml and provides typed
configuration for the pipeline, the session loop and the CLI.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from calcline.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "calcline.toml"

DEFAULT_GREETING = [
    "Hello! I'm a simple calculator.",
    "Give me an expression or type 'exit' to leave and press enter:",
]


class CalculatorConfig(BaseModel):
    """Complete calculator configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_line_length: int = Field(
        default=32, ge=2, description="Line buffer size, terminator included"
    )
    exit_command: str = Field(default="exit", min_length=1)
    invalid_message: str = "invalid input"
    strict_parentheses: bool = True
    int_bits: int = Field(default=64, ge=2, le=4096, description="Signed result width in bits")
    echo_input: bool = True
    greeting: list[str] = Field(default_factory=lambda: list(DEFAULT_GREETING))
    farewell: str = "Quitting..."


def load_config(toml_path: Path | None = None) -> CalculatorConfig:
    """
    Load calculator configuration from calcline.toml.

    Args:
        toml_path: Path to the TOML file. None, or a path that does not
            exist, yields the defaults.

    Returns:
        CalculatorConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values.
    """
    if toml_path is None or not toml_path.exists():
        return CalculatorConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{toml_path}: invalid TOML: {e}") from e

    calculator_data = data.get("calculator", {})
    if not calculator_data:
        return CalculatorConfig()

    try:
        config = CalculatorConfig(**calculator_data)
    except PydanticValidationError as e:
        raise ConfigError(f"{toml_path}: invalid [calculator] section:\n{e}") from e

    logger.debug("Loaded configuration from %s", toml_path)
    return config
