"""
Unified exception handling module

Defines the exceptions raised by the .env file loader. Typed getters never
raise; only file discovery and parsing failures reach the caller.
"""

from typing import Optional, Dict, Any


class StaticEnvException(Exception):
    """Base exception class for the package"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class EnvFileError(StaticEnvException):
    """.env file related exceptions"""
    pass


class EnvFileNotFoundError(EnvFileError):
    """No regular .env file in the searched directory"""

    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(
            f"Could not open .env file in current directory: {directory}",
            error_code="ENV_FILE_NOT_FOUND",
            details={"directory": directory},
        )


class EnvFileParseError(EnvFileError):
    """The .env file exists but contains a statement that cannot be parsed"""

    def __init__(self, path: str, line: int, statement: str = ""):
        self.path = path
        self.line = line
        super().__init__(
            f"Malformed statement in {path} at line {line}: {statement.strip()!r}",
            error_code="ENV_FILE_PARSE_ERROR",
            details={"path": path, "line": line},
        )
