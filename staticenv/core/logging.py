"""
Logging configuration module

Provides the logger factory used across the package. Level and optional log
file are taken from STATICENV_LOG_LEVEL and STATICENV_LOG_FILE.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up logger

    Args:
        name: Logger name
        level: Log level
        log_file: Log file path
        format_string: Log format string

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(name)

    # Avoid duplicate configuration
    if logger.handlers:
        return logger

    logger.setLevel(level)
    # Records go to our own handlers only; the host's root handlers would repeat them
    logger.propagate = False

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_project_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get project logger instance

    Args:
        name: Module name
        level: Log level, uses STATICENV_LOG_LEVEL or INFO if None

    Returns:
        logging.Logger: Configured logger instance
    """
    if level is None:
        level_str = os.getenv('STATICENV_LOG_LEVEL', 'INFO').upper()
        level = getattr(logging, level_str, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO

    return setup_logger(
        name=name,
        level=level,
        log_file=os.getenv('STATICENV_LOG_FILE') or None
    )
