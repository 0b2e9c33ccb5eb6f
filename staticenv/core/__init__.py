"""
Core Utilities Module

Provides fundamental tools for the package, including:
- Exception handling
- Logging configuration
"""

from .exceptions import (
    StaticEnvException,
    EnvFileError,
    EnvFileNotFoundError,
    EnvFileParseError,
)

from .logging import (
    get_project_logger,
)

__all__ = [
    "StaticEnvException",
    "EnvFileError",
    "EnvFileNotFoundError",
    "EnvFileParseError",
    "get_project_logger",
]
