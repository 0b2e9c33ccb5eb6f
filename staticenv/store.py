"""
Key/value stores backing the environment accessor

The accessor and the .env loader never touch ``os.environ`` directly; they go
through an ``EnvStore`` so an in-memory mapping can stand in for the process
environment.
"""

import os
from typing import Dict, Optional, Protocol


class EnvStore(Protocol):
    """Minimal read/write interface over an environment-like mapping"""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...


class OsEnvironStore:
    """Store backed by the process environment"""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def __repr__(self) -> str:
        return "OsEnvironStore()"


class MappingStore:
    """Store backed by a plain dict"""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = data if data is not None else {}

    def get(self, name: str) -> Optional[str]:
        return self.data.get(name)

    def set(self, name: str, value: str) -> None:
        self.data[name] = value

    def __repr__(self) -> str:
        return f"MappingStore({self.data!r})"


def default_store() -> EnvStore:
    """Return the store used when none is injected"""
    return OsEnvironStore()
