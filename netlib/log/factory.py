"""
Factory for creating and configuring loggers.

Network operations log through ``logging.getLogger(__name__)`` unless they
are handed a logger, so attach() is used to route the whole ``netlib``
hierarchy through a LogFormatter handler.
"""

import logging
import sys
from typing import IO, Any

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_handler(
        config: LogConfig, stream: IO[str] | None = None
    ) -> logging.Handler:
        """Create a stream handler (stderr by default) with a LogFormatter."""
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(LogFormatter(config))
        return handler

    @staticmethod
    def create(name: str, config: LogConfig, stream: IO[str] | None = None) -> Logger:
        """
        Create a standalone logger with its own handler.

        Example:
            >>> config = LogConfig.from_params(level="debug", colors=False)
            >>> lg = LoggerFactory.create("netlib.cli", config)
            >>> lg.info("listening", extra={"port": 8080})
        """
        logger = Logger(name, config)
        logger.propagate = False
        logger.addHandler(LoggerFactory.create_handler(config, stream))
        return logger

    @staticmethod
    def attach(
        name: str, config: LogConfig, stream: IO[str] | None = None
    ) -> logging.Logger:
        """
        Configure an existing standard logger hierarchy.

        Replaces the logger's handlers with one LogFormatter handler and sets
        its level. Disabled configs (level=False) silence the hierarchy.
        """
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        if config.level is False:
            logger.setLevel(logging.CRITICAL + 1)
            logger.addHandler(logging.NullHandler())
        else:
            logger.setLevel(config.level)
            logger.addHandler(LoggerFactory.create_handler(config, stream))
        logger.propagate = False
        return logger


def create_lg(
    level: str | int | bool = "info",
    micros: bool = False,
    colors: bool | None = None,
    stream: IO[str] | None = None,
    name: str = "netlib",
) -> Any:
    """
    Create a logger for applications using netlib.

    Also routes the library's own module loggers (``netlib.*``) through the
    same formatting and level.

    Args:
        level: Log level name, number, or False to disable
        micros: Show microsecond precision
        colors: Colored output; defaults to whether the stream is a terminal
        stream: Output stream (stderr by default)
        name: Logger name

    Returns:
        Logger: Configured logger
    """
    out = stream or sys.stderr
    if colors is None:
        colors = hasattr(out, "isatty") and out.isatty()
    config = LogConfig.from_params(level, micros=micros, colors=colors)
    LoggerFactory.attach("netlib", config, out)
    return LoggerFactory.create(name, config, out)
