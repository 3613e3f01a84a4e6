"""Logging configuration for the tutor.

JSON lines in production, rich console output otherwise.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

from tf_tutor.config import settings

_HANDLER_NAME = "tf_tutor"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "area"):
            log_data["area"] = record.area
        if hasattr(record, "key"):
            log_data["key"] = record.key
        return json.dumps(log_data)


def setup_logging(log_level: str = None) -> None:
    """Configure the root logger.

    Args:
        log_level: Logging level name. If None, uses settings.LOG_LEVEL,
                   falling back to WARNING.
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL or "WARNING"
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    if settings.is_production:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.set_name(_HANDLER_NAME)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    # Re-running setup replaces our handler instead of stacking another one
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={log_level}, environment={settings.ENVIRONMENT}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Could not persist progress", extra={"key": "averageScores"})
    """
    return logging.getLogger(name)
