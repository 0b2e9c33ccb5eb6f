"""
Environment file loading module

Finds a .env file in the working directory, validates it and either applies
its pairs to an environment store or returns them as a mapping.
"""

import io
import os
import re
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values
from dotenv.parser import parse_stream
from dotenv.variables import parse_variables

from ..core.exceptions import EnvFileError, EnvFileNotFoundError, EnvFileParseError
from ..core.logging import get_project_logger
from ..store import EnvStore, default_store

logger = get_project_logger(__name__)

ENV_FILE_NAME = ".env"

PathLike = Union[str, Path]

# YAML-style "KEY: value", which python-dotenv does not understand
_COLON_STATEMENT_RE = re.compile(
    r"\A(?P<lead>\s*)(?P<export>export\s+)?(?P<key>[A-Za-z_][A-Za-z0-9_.]*)"
    r"[ \t]*:[ \t]*(?P<value>[^\r\n]*)(?P<eol>\r\n|\n|\r)?\Z"
)


def find_env_file(directory: Optional[PathLike] = None) -> Path:
    """
    Locate the .env file directly inside ``directory``

    Args:
        directory: Directory to search, defaults to the current working directory

    Returns:
        Path: Path of the .env file

    Raises:
        EnvFileNotFoundError: The file is missing or is a directory
    """
    search_dir = str(directory) if directory is not None else os.getcwd()
    env_path = Path(search_dir) / ENV_FILE_NAME

    if not env_path.is_file():
        logger.debug(f"No {ENV_FILE_NAME} file in {search_dir}")
        raise EnvFileNotFoundError(search_dir)

    return env_path


def _read_text(env_path: Path) -> str:
    try:
        return env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read environment file {env_path}: {e}")
        raise EnvFileError(
            f"Failed to read environment file {env_path}: {e}",
            error_code="ENV_FILE_READ_ERROR",
            details={"path": str(env_path)},
        ) from e


def _is_malformed(binding) -> bool:
    return binding.error or (binding.key is not None and binding.value is None)


def _normalize(content: str) -> str:
    """Rewrite ``KEY: value`` statements as ``KEY=value``, keeping line numbers."""
    chunks = []
    for binding in parse_stream(io.StringIO(content)):
        chunk = binding.original.string
        if _is_malformed(binding):
            match = _COLON_STATEMENT_RE.match(chunk)
            if match:
                chunk = "{lead}{export}{key}={value}{eol}".format(
                    lead=match["lead"],
                    export=match["export"] or "",
                    key=match["key"],
                    value=match["value"],
                    eol=match["eol"] or "",
                )
        chunks.append(chunk)
    return "".join(chunks)


def _validate(env_path: Path, content: str) -> None:
    """Reject statements python-dotenv would silently skip, and bare keys."""
    for binding in parse_stream(io.StringIO(content)):
        if _is_malformed(binding):
            logger.error(f"Malformed statement in {env_path} at line {binding.original.line}")
            raise EnvFileParseError(str(env_path), binding.original.line, binding.original.string)


class _ResolutionScope:
    """Variables visible to ${VAR} expansion: earlier file values, then the store"""

    def __init__(self, resolved: Dict[str, str], store: EnvStore):
        self.resolved = resolved
        self.store = store

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        if name in self.resolved:
            return self.resolved[name]
        value = self.store.get(name)
        return default if value is None else value


def _interpolate(values: Dict[str, str], store: EnvStore) -> Dict[str, str]:
    resolved: Dict[str, str] = {}
    scope = _ResolutionScope(resolved, store)
    for key, value in values.items():
        resolved[key] = "".join(atom.resolve(scope) for atom in parse_variables(value))
    return resolved


def _parse(env_path: Path, store: EnvStore) -> Dict[str, str]:
    content = _normalize(_read_text(env_path))
    _validate(env_path, content)
    values = dotenv_values(stream=io.StringIO(content), interpolate=False)
    return _interpolate({key: value for key, value in values.items() if value is not None}, store)


def read_env(directory: Optional[PathLike] = None, store: Optional[EnvStore] = None) -> Dict[str, str]:
    """
    Read the .env file without touching the environment

    Args:
        directory: Directory to search, defaults to the current working directory
        store: Store consulted for ${VAR} references the file does not define,
            defaults to the process environment; it is never written

    Returns:
        Dict[str, str]: Parsed key/value pairs

    Raises:
        EnvFileNotFoundError: No .env file in the directory
        EnvFileParseError: The file contains a malformed statement
    """
    if store is None:
        store = default_store()

    env_path = find_env_file(directory)
    values = _parse(env_path, store)
    logger.debug(f"Read {len(values)} entries from {env_path}")
    return values


def load_env(directory: Optional[PathLike] = None, store: Optional[EnvStore] = None) -> Dict[str, str]:
    """
    Load the .env file into the environment

    Variables that are already set, even to an empty string, keep their value.

    Args:
        directory: Directory to search, defaults to the current working directory
        store: Target store, defaults to the process environment

    Returns:
        Dict[str, str]: The pairs that were applied

    Raises:
        EnvFileNotFoundError: No .env file in the directory
        EnvFileParseError: The file contains a malformed statement
    """
    if store is None:
        store = default_store()

    env_path = find_env_file(directory)
    applied: Dict[str, str] = {}
    for key, value in _parse(env_path, store).items():
        if store.get(key) is not None:
            logger.debug(f"Keeping existing value for {key}")
            continue
        store.set(key, value)
        applied[key] = value

    logger.info(f"Successfully loaded environment file: {env_path} ({len(applied)} variables set)")
    return applied
