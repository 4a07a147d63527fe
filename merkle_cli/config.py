"""
CLI Configuration

Configuration management for the merkle CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from merkle_core.config.runtime import RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "MERKLE_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Tree construction and logging settings
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Output
    default_output_format: str = "human"  # "human" or "json"


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    config.runtime = RuntimeConfig.from_dict(data)
    config.default_output_format = data.get("output_format", config.default_output_format)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "merkle.json",
            Path.cwd() / ".merkle.json",
            Path.home() / ".config" / "merkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Env takes precedence
    config.runtime = config.runtime.with_env_overrides()
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")

    return config


def config_to_dict(config: CLIConfig) -> dict:
    """Flatten a CLIConfig into the JSON file layout."""
    data = config.runtime.to_dict()
    data["output_format"] = config.default_output_format
    return data


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "hash_algorithm": "sha3_256",
    "max_depth": 24,
    "default_depth": 20,
    "initial_leaf": "0x0000000000000000000000000000000000000000000000000000000000000000"
  },
  "logging": {
    "level": "INFO",
    "file": null
  },
  "output_format": "human"
}
"""
