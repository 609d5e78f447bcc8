"""Logging setup for the group chat CLI."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(session_id)s - %(message)s"


class SessionFilter(logging.Filter):
    """Stamps every record with the current session fields ("-" outside a session)."""

    def __init__(self):
        super().__init__()
        self.fields: Dict[str, Any] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.fields.get("session_id", "-")
        for key, value in self.fields.items():
            setattr(record, key, value)
        return True


_session_filter = SessionFilter()


def setup_logging(
    level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route log records to the console and, optionally, a file.

    The console also carries the chat transcript, so when a log file is
    given only warnings and errors reach the console.

    Args:
        level: Logging level name (DEBUG, INFO, ...)
        log_format: Format string; may reference %(session_id)s
        log_file: Optional path to log file

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(log_format)

    handlers = [(logging.StreamHandler(), logging.WARNING if log_file else numeric_level)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append((logging.FileHandler(log_file), numeric_level))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        handler.addFilter(_session_filter)
        root_logger.addHandler(handler)

    return root_logger


def set_context(**fields):
    """Attach fields (e.g. session_id="SESSION-1A2B3C4D") to subsequent records."""
    _session_filter.fields.update(fields)


def clear_context():
    _session_filter.fields.clear()
