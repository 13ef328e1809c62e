"""
Structured Logger

Every entry is a timestamp, a level, the logger name and a message plus any
number of keyword fields. The "json" style writes one JSON object per line,
the "text" style writes a single readable line.

Usage:
    logger = LoggerFactory.get_logger("cukeslicer.assembly")
    logger.info("Feature file written", filename="search-for-cheese-101502-12.feature")

    feature_logger = logger.with_context(feature="Web search")
    feature_logger.warning("No scenarios found")
"""

import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional, TextIO
from enum import IntEnum


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class StructuredLogger:
    """
    Logger writing structured entries to a text stream.

    Example:
        logger = StructuredLogger("cukeslicer.assembly", level=LogLevel.INFO)
        logger.info("Scenario assembled", scenario="Search for Cheese")

        # Output:
        # {"timestamp":"...","level":"INFO","logger":"cukeslicer.assembly","message":"Scenario assembled","scenario":"Search for Cheese"}
    """

    def __init__(
        self, name: str, level: LogLevel = LogLevel.INFO, output_stream: TextIO = None, format_style: str = "json"
    ):
        self.name = name
        self.level = level
        self.output_stream = output_stream
        self.format_style = format_style
        self._context: Dict[str, Any] = {}

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.value >= self.level.value

    def _format_log(self, level: LogLevel, message: str, extra: Optional[Dict[str, Any]] = None) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.name,
            "logger": self.name,
            "message": message,
        }
        log_entry.update(self._context)
        if extra:
            log_entry.update(extra)

        if self.format_style == "json":
            return json.dumps(log_entry, default=str)

        level_str = f"[{log_entry['level']}]".ljust(10)
        fields = " ".join(
            f"{key}={value}" for key, value in log_entry.items() if key not in ("timestamp", "level", "logger", "message")
        )
        line = f"{log_entry['timestamp']} {level_str} {self.name.ljust(20)} | {message}"
        return f"{line} | {fields}" if fields else line

    def _write(self, level: LogLevel, message: str, extra: Optional[Dict[str, Any]] = None):
        if not self.is_enabled_for(level):
            return
        # resolved per write so a redirected sys.stderr is honored
        stream = self.output_stream or sys.stderr
        stream.write(self._format_log(level, message, extra) + "\n")
        stream.flush()

    def debug(self, message: str, **extra):
        self._write(LogLevel.DEBUG, message, extra)

    def info(self, message: str, **extra):
        self._write(LogLevel.INFO, message, extra)

    def warning(self, message: str, **extra):
        """
        Log warning message.

        Example:
            logger.warning("Scenario skipped by tag filter", tags="@wip", expected="@smoke,@regression")
        """
        self._write(LogLevel.WARNING, message, extra)

    def error(self, message: str, **extra):
        self._write(LogLevel.ERROR, message, extra)

    def critical(self, message: str, **extra):
        self._write(LogLevel.CRITICAL, message, extra)

    def with_context(self, **context) -> "StructuredLogger":
        """
        Return a logger that adds the given fields to every entry.

        Example:
            feature_logger = logger.with_context(feature="Web search")
            feature_logger.info("Background recorded")
        """
        new_logger = StructuredLogger(self.name, self.level, self.output_stream, self.format_style)
        new_logger._context = {**self._context, **context}
        return new_logger


class LoggerFactory:
    """
    Factory keeping one logger per name, all sharing the configured
    level, format and stream.

    A stream configured with owns_stream=True (a log file opened by
    LoggingConfig) is closed when it is replaced, on reset() and on close().
    """

    _default_level = LogLevel.INFO
    _default_format = "json"
    _default_stream = None
    _owned_stream = None
    _loggers: Dict[str, StructuredLogger] = {}

    @classmethod
    def configure(cls, level: str = "INFO", format_style: str = "json", stream: TextIO = None, owns_stream=False):
        """
        Configure default logger settings and apply them to existing loggers.

        Raises:
            ValueError: on an unknown level or format style
        """
        level_upper = level.upper()
        if level_upper not in LogLevel.__members__:
            raise ValueError(f"Invalid log level: {level}. Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        if format_style not in ("json", "text"):
            raise ValueError(f"Invalid format style: {format_style}. Must be 'json' or 'text'")

        if cls._owned_stream is not None and cls._owned_stream is not stream:
            cls._owned_stream.close()
        cls._owned_stream = stream if owns_stream else None

        cls._default_level = LogLevel[level_upper]
        cls._default_format = format_style
        cls._default_stream = stream
        cls._apply_defaults()

    @classmethod
    def get_logger(cls, name: str) -> StructuredLogger:
        if name not in cls._loggers:
            cls._loggers[name] = StructuredLogger(name, cls._default_level, cls._default_stream, cls._default_format)
        return cls._loggers[name]

    @classmethod
    def close(cls):
        """Close an owned stream and fall back to stderr, keeping level and format"""
        if cls._owned_stream is None:
            return
        cls._owned_stream.close()
        cls._owned_stream = None
        cls._default_stream = None
        cls._apply_defaults()

    @classmethod
    def reset(cls):
        """Reset factory defaults. Cached loggers are kept so module level loggers stay valid."""
        cls.close()
        cls._default_level = LogLevel.INFO
        cls._default_format = "json"
        cls._default_stream = None
        cls._apply_defaults()

    @classmethod
    def _apply_defaults(cls):
        for logger in cls._loggers.values():
            logger.level = cls._default_level
            logger.format_style = cls._default_format
            logger.output_stream = cls._default_stream
