"""Logging configuration for tracelens."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from tracelens.core.domain.config import LogFormat, LoggingConfig
from tracelens.ui.console import console

LOGGER_NAME = "tracelens"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
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
    verbose: bool = False,
    level: int = logging.INFO,
    log_format: LogFormat | None = None,
) -> logging.Logger:
    """Configure the ``tracelens`` logger.

    Args:
        log_file: Write records here
        verbose: Also render records on the console through rich
        level: Minimum level for every handler
        log_format: ``"text"`` or ``"json"``; inferred from the file suffix
            (``.json`` gets JSON lines) when omitted

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    close_logging()

    if log_file is not None:
        if log_format is None:
            log_format = "json" if log_file.suffix == ".json" else "text"
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
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def setup_logging_from_config(
    config: LoggingConfig,
    log_file: Path | None = None,
) -> logging.Logger:
    """Apply a :class:`LoggingConfig` section."""
    return setup_logging(log_file=log_file, verbose=config.verbose, log_format=config.log_format)


def close_logging() -> None:
    """Close and detach every handler on the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


__all__ = [
    "JSONFormatter",
    "LOGGER_NAME",
    "close_logging",
    "setup_logging",
    "setup_logging_from_config",
]
