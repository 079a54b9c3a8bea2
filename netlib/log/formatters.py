"""
Log formatter for the logging system.

Renders records as::

    [12:34:56,789] [D] connected        [address:127.0.0.1:8080] [fd:7] [netlib.net.tcp]

Extra field values are rendered with network-aware conversions: socket
address tuples as host:port, error kinds by name and code, exceptions by
class name and message.
"""

import logging
from enum import Enum
from typing import Any

from ..net.errors import ErrorKind
from .config import LogConfig
from .constants import LogConstants

# Attributes every LogRecord carries; anything else came from extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def format_value(value: Any) -> str:
    """Render one extra field value."""
    if isinstance(value, ErrorKind):
        return f"{value.name}({value.code})"
    if isinstance(value, BaseException):
        name = value.__class__.__name__
        return f"{name}: {value}" if str(value) else name
    if isinstance(value, tuple) and len(value) >= 2 and isinstance(value[0], str):
        # (host, port) or (host, port, flowinfo, scope_id)
        if ":" in value[0]:
            return f"[{value[0]}]:{value[1]}"
        return f"{value[0]}:{value[1]}"
    if isinstance(value, Enum):
        return value.name
    return str(value)


def format_fields(fields: dict[str, Any]) -> str:
    """Render extra fields as '[key:value] ...' sorted by key."""
    return " ".join(f"[{k}:{format_value(fields[k])}]" for k in sorted(fields))


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extra fields of a record, whether or not it came from a netlib Logger."""
    extra = getattr(record, LogConstants.EXTRA_ATTR, None)
    if extra is not None:
        return extra
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class LogFormatter(logging.Formatter):
    """Formatter with optional colors, microseconds and structured fields."""

    def __init__(self, config: LogConfig) -> None:
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, datefmt)
        if self._config.micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s

    def format(self, record: logging.LogRecord) -> str:
        # Tracebacks stay below the first line
        head, sep, tail = super().format(record).partition("\n")

        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        pad = " " * max(1, rule - len(head))
        fields = format_fields(record_fields(record))
        meta = f"[{record.name}]"

        if self._config.colors:
            col = LogConstants.COLORS.get(record.levelno, "")
            head = col + head + LogConstants.RESET
            meta = LogConstants.GRAY + meta + LogConstants.RESET
            if fields:
                fields = col + fields + LogConstants.RESET

        line = head + pad + (fields + " " if fields else "") + meta
        return line + sep + tail
