"""Logging configuration for Retroactive.

Provides centralized logging with redaction so that user names in
home-directory paths and credentials embedded in URLs never reach the
log file.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional, Union


# Patterns to redact from logs
REDACTION_PATTERNS = [
    # macOS / Linux home directories: /Users/jane/Applications/...
    (re.compile(r'(/Users/)[^/\s]+'), r'\1[REDACTED]'),
    (re.compile(r'(/home/)[^/\s]+'), r'\1[REDACTED]'),
    # URLs with credentials
    (re.compile(r'(https?://)[^/\s:@]+:[^/\s@]+@'), r'\1[REDACTED]@'),
]


class RedactingFormatter(logging.Formatter):
    """Custom formatter that redacts personal data from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting user names and credentials."""
        message = super().format(record)
        for pattern, replacement in REDACTION_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure application logging with redaction.

    Args:
        level: Logging level or level name (default INFO)
        log_file: Optional file path for log output
        console: Whether to output to console (default True)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("retroactive")
    logger.setLevel(level)

    logger.handlers.clear()

    formatter = RedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

