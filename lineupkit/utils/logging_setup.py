"""Logging setup for lineupkit with console and optional rotating file output"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lineupkit.config import LoggingConfig


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    log_to_console: bool = True,
    log_to_file: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Set up logging for applications embedding lineupkit.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (absolute or relative)
        log_to_console: Whether to log to stdout
        log_to_file: Whether to log to a rotating file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of rotated files to keep
        log_format: Custom log format string

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_to_file and log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(
        f"lineupkit logging initialized - Level: {log_level}, "
        f"console: {'enabled' if log_to_console else 'disabled'}, "
        f"file: {log_file if log_to_file else 'disabled'}"
    )

    return root_logger


def setup_logging_from_config(config: "LoggingConfig") -> logging.Logger:
    """Configure logging from a LoggingConfig section."""
    return setup_logging(
        log_level=config.level,
        log_file=config.file,
        log_to_console=config.log_to_console,
        log_to_file=config.log_to_file,
        max_bytes=config.max_bytes,
        backup_count=config.backup_count,
        log_format=config.format,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the logger (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
