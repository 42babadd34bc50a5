"""Logging setup for the fuzzy-path command line."""

import logging
import logging.handlers
import json
import sys
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

# format name -> (fmt, datefmt)
_TEXT_FORMATS = {
    "simple": ("%(levelname)-8s | %(name)s | %(message)s", None),
    "detailed": (
        "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        "%Y-%m-%d %H:%M:%S",
    ),
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with the command context under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False)


def make_formatter(format: str) -> logging.Formatter:
    """Formatter for a ``LoggingConfig.format`` name; unknown names get ``simple``."""
    if format == "json":
        return JsonFormatter()
    fmt, datefmt = _TEXT_FORMATS.get(format, _TEXT_FORMATS["simple"])
    return logging.Formatter(fmt=fmt, datefmt=datefmt)


def setup_logging(
    level: str = "WARNING",
    format: str = "simple",
    log_file: Optional[Path] = None,
) -> None:
    """Configure the root logger for one CLI run.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Console format (simple, detailed, json)
        log_file: Optional rotating log file, always written as JSON
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(make_formatter(format))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)


class _ContextFilter(logging.Filter):
    def __init__(self, fields: Dict[str, Any]) -> None:
        super().__init__()
        self.fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = {**getattr(record, "context", {}), **self.fields}
        return True


class LogContext:
    """Tag every record handled by the root handlers with ``fields`` while active.

    Used by the CLI to mark which subcommand a record came from. Only the
    JSON formatter prints the fields.
    """

    def __init__(self, **fields: Any) -> None:
        self._filter = _ContextFilter(fields)
        self._handlers: list = []

    def __enter__(self) -> "LogContext":
        self._handlers = list(logging.getLogger().handlers)
        for handler in self._handlers:
            handler.addFilter(self._filter)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        for handler in self._handlers:
            handler.removeFilter(self._filter)
        self._handlers = []
