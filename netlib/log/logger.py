"""
Logger class for the logging system.

Extends the standard logger with a TRACE level and keeps the caller's
``extra=`` fields together on the record so formatters can render them as
structured ``[key:value]`` fields.
"""

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants


class Logger(logging.Logger):
    """
    Enhanced logger with structured extra fields and a trace level.

    Example:
        lg.debug("connected", extra={"address": address, "fd": 7})
    """

    def __init__(self, name: str, config: LogConfig | None = None) -> None:
        # Instantiated without config by logging.getLogger() when installed
        # as the logger class
        if config is None:
            config = LogConfig()

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def disabled_logging(self) -> bool:
        return self._logging_disabled

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record and attach the extra fields as one mapping."""
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func, extra, sinfo
        )
        setattr(record, LogConstants.EXTRA_ATTR, dict(extra) if extra else {})
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra'
        """
        trace_level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if not self._logging_disabled and self.isEnabledFor(trace_level):
            self._log(trace_level, msg, args, **kwargs)

    def _log(self, level: int, msg: Any, args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        if self._logging_disabled:
            return
        super()._log(level, msg, args, **kwargs)
