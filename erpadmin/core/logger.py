"""Logging setup for the ERP admin service.

All package loggers live under the ``erpadmin`` namespace, so configuring
that one logger at startup covers every module that calls
``logging.getLogger(__name__)``.
"""

import logging
import logging.handlers
import os
from typing import Optional

from .config import Settings

ROOT_LOGGER = "erpadmin"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logger(
    name: str = ROOT_LOGGER,
    log_dir: str = "/var/log/erpadmin",
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    file_logging: bool = False,
    console_logging: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Set up a logger with optional rotating file and console handlers.

    Args:
        name: Logger name
        log_dir: Directory for the log file when file logging is on
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string
        date_format: Custom date format string (ISO 8601 by default)
        file_logging: Write to <log_dir>/<name>.log
        console_logging: Write to stderr
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance

    Raises:
        ValueError: If the level is not a standard logging level
    """
    level_upper = level.upper()
    if level_upper not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: {', '.join(VALID_LEVELS)}"
        )

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level_upper))

    # Already configured; only the level is updated
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        log_format or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )

    if file_logging:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def configure_logging(settings: Settings) -> logging.Logger:
    """Configure the package root logger from application settings."""
    return setup_logger(
        ROOT_LOGGER,
        log_dir=settings.log_dir,
        level=settings.log_level,
        file_logging=settings.log_to_file,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
