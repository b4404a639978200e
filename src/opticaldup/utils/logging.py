"""Centralized logging utilities for opticaldup.

Provides a single place to configure logging and fetch namespaced loggers.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOGGER_NAMESPACE = "opticaldup"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# Log rotation settings
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Configure logging for the 'opticaldup' namespace.

    Args:
        level: Logging level for the application logger
        log_file: Optional path for log file output
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Notes:
        - Root logger kept at WARNING to suppress third-party noise
        - 'opticaldup' logger uses the requested level
        - Console handler uses concise format; file handler (if any) is detailed at DEBUG
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(level)
    # Avoid duplicate logs if called multiple times
    if app_logger.handlers:
        for h in list(app_logger.handlers):
            app_logger.removeHandler(h)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    if log_file:
        log_file = Path(log_file)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            app_logger.addHandler(file_handler)
        except OSError as e:
            import warnings
            warnings.warn(f"Failed to create log file {log_file}: {e}")

    # Do not propagate to root to avoid double-printing
    app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger under 'opticaldup' root."""
    base = logging.getLogger(LOGGER_NAMESPACE)
    return base.getChild(name)


def level_from_verbosity(verbose: int) -> int:
    """Map a -v count to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


class LogTemplates:
    """Standard log message templates for consistent logging across modules.

    Example usage:
        logger.info(LogTemplates.FILE_LOADED.format(count=1200, path="sets.tsv"))
    """

    # File operations
    FILE_CREATED = "Created output file: {path} ({size:,} bytes)"
    FILE_LOADED = "Loaded {count:,} records from {path}"

    # Processing statistics
    PROCESSING_STATS = "Processed {input_count:,} duplicate sets -> {output_count:,} reads"
    LOCATION_STATS = "Read names with location: {located:,}/{total:,} ({percent:.1f}%)"
    OPTICAL_STATS = "Optical duplicates: {optical:,} of {total:,} reads ({percent:.2f}%)"

    # Read name parsing
    REGEX_MISMATCH = (
        "READ_NAME_REGEX '{regex}' did not match read name '{read_name}'. {hint} "
        "Note that this message will not be emitted again even if other read names "
        "do not match the regex."
    )
