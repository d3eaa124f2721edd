"""Logging configuration for hdrlang."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_config_dir

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    One JSON object per record, including fields passed via `extra`.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_to_file: bool = False,
    level: int | str = logging.WARNING,
) -> logging.Logger:
    """
    Set up logging for hdrlang.

    Args:
        verbose: If True, log at DEBUG, including the per-rule match trace
        json_format: If True, use JSON format for structured logging
        log_to_file: Whether to also log to ~/.hdrlang/logs/hdrlang.log
        level: Console level when not verbose (default: WARNING)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("hdrlang")

    # Clear existing handlers to allow reconfiguration
    logger.handlers.clear()

    console_level = logging.DEBUG if verbose else level
    logger.setLevel(logging.DEBUG if (verbose or log_to_file) else level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    if json_format:
        console_handler.setFormatter(JSONFormatter())
    elif verbose:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    else:
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_to_file:
        log_dir = get_config_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "hdrlang.log")
        file_handler.setLevel(logging.DEBUG)
        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional name for child logger (e.g., "classifier", "resolver")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"hdrlang.{name}")
    return logging.getLogger("hdrlang")
