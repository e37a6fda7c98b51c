"""
CLI Configuration

Configuration management for the selfupdatectl CLI.
Supports environment variables (and a .env file) and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


# Environment variable prefix
ENV_PREFIX = "SELFUPDATE_"

DEFAULT_PUBLIC_KEY = "ed25519.pem"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Verification
    public_key: str = DEFAULT_PUBLIC_KEY

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _check_output_format(value: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output format {value!r}, expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return value


def load_config_from_env(base: CLIConfig | None = None) -> CLIConfig:
    """
    Apply environment variables on top of a configuration.

    Only variables that are set override ``base``; a ``.env`` file in the
    working directory is loaded first without overriding the real environment.
    """
    load_dotenv(find_dotenv(usecwd=True))
    config = base if base is not None else CLIConfig()

    if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY"):
        config.public_key = os.environ[f"{ENV_PREFIX}PUBLIC_KEY"]
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.environ[f"{ENV_PREFIX}LOG_LEVEL"].upper()
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.environ[f"{ENV_PREFIX}LOG_FILE"]
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = _check_output_format(
            os.environ[f"{ENV_PREFIX}OUTPUT_FORMAT"].lower()
        )

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    config = CLIConfig()

    config.public_key = data.get("public_key", config.public_key)

    # Logging
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    # Output
    config.default_output_format = _check_output_format(
        data.get("default_output_format", config.default_output_format)
    )

    return config


def default_config_paths() -> list[Path]:
    """Locations searched when no config file is given explicitly."""
    return [
        Path.cwd() / "selfupdate.json",
        Path.cwd() / ".selfupdate.json",
        Path.home() / ".config" / "selfupdate" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file; must exist when given

    Returns:
        Merged configuration
    """
    # Start with defaults
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
