"""
Configuration management package.

This module provides:
- load_config() for YAML files with environment variable overrides
- NetConfig, the validated network settings
"""

from .config import NetConfig, apply_env_overrides, load_config
from .constants import DEFAULT_ENV_PREFIX, DEFAULTS, MAX_CONFIG_SIZE_BYTES

__all__ = [
    "NetConfig",
    "load_config",
    "apply_env_overrides",
    "DEFAULTS",
    "DEFAULT_ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
]
