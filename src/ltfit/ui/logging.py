"""Logging configuration for LTFit UI."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from ltfit.core.domain.config import LogFormat
from ltfit.ui.console import VERSION, console

# Package logger; library modules log to its children
_LOGGER_NAME = "ltfit"


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    *,
    verbose: bool = False,
    level: int = logging.INFO,
    log_format: LogFormat = "text",
) -> logging.Logger:
    """Configure the ``ltfit`` logger.

    Args:
        log_file: File receiving the log; no file handler when ``None``
        verbose: Also log to the console through Rich
        level: Log level of all handlers
        log_format: ``text`` or ``json`` for the file handler

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    close_logging()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(console=console, show_time=False, show_path=False)
        console_handler.setLevel(level)
        # UI messages are already on the console
        console_handler.addFilter(lambda record: not record.name.startswith(f"{_LOGGER_NAME}.ui"))
        logger.addHandler(console_handler)

    if logger.handlers:
        logger.info("LTFit v%s - session started", VERSION)
        logger.info("Command: %s", " ".join(sys.argv))
        logger.info("Working directory: %s", Path.cwd())
    return logger


def close_logging() -> None:
    """Close and remove all handlers of the package logger."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


__all__ = ["JSONFormatter", "close_logging", "setup_logging"]
