"""
Logging utilities with secret masking.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of store credentials (API keys, bearer tokens)
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


def mask_secret(secret: str) -> str:
    """
    Mask an API key for safe logging, keeping its last four characters.

    Examples:
        >>> mask_secret("eyJhbGciOiJIUzI1NiJ9.abcd")
        '****abcd'
        >>> mask_secret("abc")
        '****'
    """
    if not secret or len(secret) <= 8:
        return "****"
    return "****" + secret[-4:]


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks store credentials in messages.

    Catches `apikey=...`, `key: ...` and `Bearer <token>` patterns, which
    show up when request headers or connection settings get logged.
    """

    _PATTERNS = [
        (re.compile(r'(apikey|api_key|supabase_key|key)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', re.IGNORECASE),
         r'\1: ********'),
        (re.compile(r'(Bearer)\s+[A-Za-z0-9._\-]+', re.IGNORECASE),
         r'\1 ********'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask secrets in the record; always lets the record through."""
        message = record.getMessage()
        for pattern, replacement in self._PATTERNS:
            message = pattern.sub(replacement, message)
        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "lesson_trash",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Module loggers (`logging.getLogger(__name__)`) inside the package are
    children of "lesson_trash", so configuring it once covers them all.

    Args:
        name: Logger name (default: "lesson_trash")
        level: Logging level, as int or name ("DEBUG", "INFO", ...)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level="DEBUG", log_file="output/logs/trash.log")
        >>> logger.info("Trash view loaded")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    secret_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(secret_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(secret_filter)
        logger.addHandler(file_handler)

    return logger
