"""
staticenv

Typed, prefix-aware access to environment variables with .env file loading:
- env: the ``Env`` accessor and its typed getters
- parsers: per-type value parsers
- store: environment store abstraction
- config: .env file loading
- core: exceptions and logging
"""

from .core.exceptions import (
    StaticEnvException,
    EnvFileError,
    EnvFileNotFoundError,
    EnvFileParseError,
)

from .core.logging import (
    get_project_logger,
)

from .config.env_loader import (
    find_env_file,
    load_env,
    read_env,
)

from .env import Env
from .store import EnvStore, MappingStore, OsEnvironStore

__version__ = "0.1.0"

__all__ = [
    # Accessor
    "Env",

    # Stores
    "EnvStore",
    "MappingStore",
    "OsEnvironStore",

    # .env loading
    "find_env_file",
    "load_env",
    "read_env",

    # Exceptions
    "StaticEnvException",
    "EnvFileError",
    "EnvFileNotFoundError",
    "EnvFileParseError",

    # Logging
    "get_project_logger",
]
