"""
Runtime Configuration Module

Provides configuration loading for tree construction and logging.
"""

from .runtime import (
    DEFAULT_INITIAL_LEAF,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
)

__all__ = [
    "DEFAULT_INITIAL_LEAF",
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
]
