"""Logging configuration and utilities."""

import sys
import logging
from typing import Optional


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """Configure logging to standard error and optionally a file.

    Standard output is reserved for report lines, so console logging
    goes to standard error.

    Args:
        level: Logging level for the application logger
        log_file: Optional path of a log file

    Returns:
        Configured logger instance
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True  # Reset any existing configuration
    )

    logger = logging.getLogger('gitscan')
    logger.setLevel(level)
    if log_file:
        logger.info(f"Log file: {log_file}")

    return logger
