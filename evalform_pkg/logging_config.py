"""Structured logging configuration for evalform.

Library modules only create child loggers of ``evalform``; handlers are
attached by the CLI through setup_logging.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

LOGGER_NAME = "evalform"


class StructuredFormatter(logging.Formatter):
    """One line per record: timestamp, level, logger name, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the evalform logger.

    Calling it again replaces the handlers of the previous call, closing
    any log file they held open.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``evalform.<name>`` child logger for a module."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
