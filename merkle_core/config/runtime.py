"""
Runtime Configuration

Central configuration for tree construction and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


DEFAULT_INITIAL_LEAF = "0x" + "00" * 32


@dataclass
class TreeConfig:
    """Configuration for Merkle tree construction."""
    hash_algorithm: str = "sha3_256"
    # Every tree allocates 2**depth digests, so depth is capped.
    max_depth: int = 24
    default_depth: int = 20
    initial_leaf: str = DEFAULT_INITIAL_LEAF


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Hash function name (sha3_256, sha256)
        - MERKLE_MAX_DEPTH: Largest depth a tree may be built with
        - MERKLE_DEFAULT_DEPTH: Depth used when none is given
        - MERKLE_INITIAL_LEAF: Leaf digest used when none is given
        - MERKLE_LOG_LEVEL: Log level
        - MERKLE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM")
        if os.getenv("MERKLE_MAX_DEPTH"):
            overrides.setdefault("tree", {})["max_depth"] = int(os.getenv("MERKLE_MAX_DEPTH", "24"))
        if os.getenv("MERKLE_DEFAULT_DEPTH"):
            overrides.setdefault("tree", {})["default_depth"] = int(os.getenv("MERKLE_DEFAULT_DEPTH", "20"))
        if os.getenv("MERKLE_INITIAL_LEAF"):
            overrides.setdefault("tree", {})["initial_leaf"] = os.getenv("MERKLE_INITIAL_LEAF")

        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_LOG_LEVEL")
        if os.getenv("MERKLE_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv("MERKLE_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree") or {}
        logging_data = data.get("logging") or {}

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            tree=tree,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)

        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "max_depth": self.tree.max_depth,
                "default_depth": self.tree.default_depth,
                "initial_leaf": self.tree.initial_leaf,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config
