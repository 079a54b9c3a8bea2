"""
Configuration for the logging system.

LogConfig is immutable so a logger's settings cannot drift after creation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve a log level from a name, number or boolean.

    Args:
        level: Level name ("trace", "debug", ...), numeric value, or False to
               disable logging (True means info)

    Returns:
        Numeric level or False

    Raises:
        InvalidLogLevelError: If the level is not recognized
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level.isnumeric():
            return int(level)
        if level.lower() in LogConstants.LEVEL_NAMES:
            return LogConstants.LEVEL_NAMES[level.lower()]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """Immutable logger configuration."""

    level: int | bool = logging.INFO  # False disables logging
    micros: bool = False
    colors: bool = True

    @classmethod
    def from_params(
        cls, level: str | int | bool = "info", micros: bool = False, colors: bool = True
    ) -> LogConfig:
        return cls(level=resolve_level(level), micros=micros, colors=colors)

    @classmethod
    def from_config(cls, config_dict: dict, section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary (e.g. from load_config())
            section: Dotted path of the logging section

        Example:
            from netlib.config import load_config
            log_config = LogConfig.from_config(load_config("etc/netlib.yaml"))
        """
        current = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break
        current = current or {}

        return cls.from_params(
            level=current.get("level", "info"),
            micros=current.get("micros", False),
            colors=current.get("colors", True),
        )
