"""
Logging for netlib: stdlib logging with a TRACE level, structured extra
fields and optional colors.

Log Level Control:
- Use standard levels: debug, info, warning, error, critical
- Use the custom level: trace
- Disable logging completely: False or "false"
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError
from .factory import LoggerFactory, create_lg
from .formatters import LogFormatter, format_fields, format_value, record_fields
from .logger import Logger

logging.TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]  # type: ignore[attr-defined]
logging.addLevelName(logging.TRACE, "TRACE")  # type: ignore[attr-defined]

__all__ = [
    "Logger",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LoggerFactory",
    "InvalidLogLevelError",
    "create_lg",
    "format_fields",
    "format_value",
    "record_fields",
    "resolve_level",
]
