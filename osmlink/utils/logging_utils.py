"""Logging setup shared by osmlink modules and scripts."""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """Configure a logger with a console handler and optional file handler.

    Args:
        name: Logger name
        log_level: Level name (defaults to settings.log_level)
        log_file: Optional log file name
        log_dir: Directory for the log file (defaults to settings.logs_path)

    Returns:
        Configured logger
    """
    from osmlink.conf.settings import settings

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (log_level or settings.log_level).upper(), logging.INFO))
    formatter = logging.Formatter(settings.log_format)

    # Avoid duplicate handlers when called repeatedly
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is None and settings.log_to_file:
        log_file = f"{name.replace('.', '_')}.log"

    if log_file:
        log_path = Path(log_dir or settings.logs_path)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Handlers are attached by setup_logger on the application logger, so
    module loggers only propagate.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
