"""
Centralized logging for postless.

Log output never goes to stdout: stdout carries the rendered frames, so
handlers write to stderr or to ``settings.log_file``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from postless.config import settings

ROOT_LOGGER_NAME = "postless"

_RESERVED_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """
    Formatter producing one JSON object per log record.

    Extra fields passed through ``extra=`` are merged into the entry.
    """

    SENSITIVE_KEYS = {"jwt", "token", "secret", "authorization", "password"}

    def __init__(self, sanitize: bool = True):
        """
        Initialize the structured formatter.

        Args:
            sanitize: Whether to redact sensitive fields
        """
        super().__init__()
        self.sanitize = sanitize

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        if self.sanitize:
            log_entry = self._sanitize_log_entry(log_entry)

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)

    def _sanitize_log_entry(self, log_entry: Dict[str, Any]) -> Dict[str, Any]:
        """
        Redact values stored under sensitive keys, recursively.

        Args:
            log_entry: The log entry dictionary to sanitize

        Returns:
            Dict[str, Any]: Sanitized log entry
        """
        def sanitize_value(obj: Any) -> Any:
            if isinstance(obj, dict):
                return {
                    k: "[REDACTED]" if str(k).lower() in self.SENSITIVE_KEYS else sanitize_value(v)
                    for k, v in obj.items()
                }
            if isinstance(obj, list):
                return [sanitize_value(item) for item in obj]
            return obj

        return sanitize_value(log_entry)


class SimpleFormatter(logging.Formatter):
    """Simple, human-readable formatter."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def _build_handler() -> logging.Handler:
    if settings.log_file:
        return logging.FileHandler(settings.log_file, encoding="utf-8")
    return logging.StreamHandler(sys.stderr)


def setup_logger(
    name: Optional[str] = None,
    level: Optional[str] = None,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Calling it again for an already configured logger updates its level and
    formatter in place, which is how the CLI switches to verbose output.

    Args:
        name: Logger name (defaults to 'postless')
        level: Log level (defaults to settings.log_level)
        log_format: 'structured' or 'simple' (defaults to settings.log_format)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger_name = name or ROOT_LOGGER_NAME
    log_level = getattr(logging, (level or settings.log_level).upper())
    format_type = log_format or settings.log_format

    if format_type == "structured":
        formatter: logging.Formatter = StructuredFormatter(sanitize=settings.sanitize_logs)
    else:
        formatter = SimpleFormatter()

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    if not logger.handlers:
        logger.addHandler(_build_handler())
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a module logger that reports through the package root logger.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        logging.Logger: Logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logger
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Create the global logger instance
logger = setup_logger()
