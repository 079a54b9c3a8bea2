"""
Unified exception hierarchy for netlib.

This module provides the package-wide base exception. Socket operation
failures live in netlib.net.exceptions and inherit from NetlibError, so
callers can catch every netlib failure with a single except clause.
"""

from typing import Any


class NetlibError(Exception):
    """
    Base exception for all netlib errors.

    Example:
        try:
            handle = connect("example.com", "80")
        except NetlibError as e:
            print(f"network error: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(NetlibError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or too large
        - Invalid YAML syntax
        - Unknown address family name
        - Non-positive backlog or receive size
    """

    pass


class LoggingError(NetlibError):
    """
    Logging-related errors.

    Examples:
        - Invalid log level
    """

    pass
