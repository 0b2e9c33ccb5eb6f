"""
Environment accessor

``Env`` reads configuration values from the environment by trying an ordered
list of candidate names, optionally namespaced by a prefix. Typed getters
never raise: an absent, empty or malformed value yields the caller's default.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, Optional, TypeVar, Union

from .config.env_loader import load_env, read_env
from .parsers import (
    parse_bool,
    parse_duration,
    parse_float,
    parse_int,
    parse_str,
    parse_time,
)
from .store import EnvStore, default_store

T = TypeVar("T")

Names = Union[str, Iterable[str]]


class Env:
    """Prefix-aware typed accessor over an environment store"""

    def __init__(self, prefix: str = "", store: Optional[EnvStore] = None):
        self.prefix = prefix
        self.store = store if store is not None else default_store()

    @classmethod
    def with_prefix(cls, prefix: str, store: Optional[EnvStore] = None) -> "Env":
        """Create an accessor whose lookups are namespaced by ``prefix``"""
        return cls(prefix=prefix, store=store)

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"Env(prefix={self.prefix!r}, store={self.store!r})"

    def resolve_name(self, name: str) -> str:
        """Return the variable name actually looked up for ``name``"""
        if self.prefix:
            return f"{self.prefix}_{name}"
        return name

    def lookup(self, names: Names) -> Optional[str]:
        """
        Return the first non-empty value among the candidate names

        Args:
            names: Candidate names in priority order; a single string is one name

        Returns:
            Optional[str]: The raw value, or None when every candidate is unset
                or empty
        """
        if isinstance(names, str):
            names = (names,)
        for name in names:
            value = self.store.get(self.resolve_name(name))
            if value:
                return value
        return None

    def _get(self, default: T, names: Names, parse: Callable[[str], T]) -> T:
        value = self.lookup(names)
        if value is None:
            return default
        try:
            return parse(value)
        except ValueError:
            return default

    def getenv(self, default: str, names: Names) -> str:
        """Returns the first non-empty value as a string, or ``default``."""
        return self._get(default, names, parse_str)

    get_str = getenv

    def get_int(self, default: int, names: Names) -> int:
        """Returns the first non-empty value as a base-10 integer, or ``default``."""
        return self._get(default, names, parse_int)

    def get_float(self, default: float, names: Names) -> float:
        """
        Returns the first non-empty value as a float, or ``default``

        Well-formed values are rounded to the nearest double. Malformed values,
        and finite values beyond the double range, yield ``default``.
        """
        return self._get(default, names, parse_float)

    def get_bool(self, default: bool, names: Names) -> bool:
        """
        Returns the first non-empty value as a bool, or ``default``

        Accepts 1, t, T, TRUE, true, True, 0, f, F, FALSE, false, False. Any
        other value yields ``default``.
        """
        return self._get(default, names, parse_bool)

    def get_duration(self, default: timedelta, names: Names) -> timedelta:
        """
        Returns the first non-empty value as a timedelta, or ``default``

        A duration is a possibly signed sequence of decimal numbers, each with
        optional fraction and a unit suffix, such as "300ms", "-1.5h" or
        "2h45m". Valid time units are "ns", "us" (or "µs"), "ms", "s", "m", "h".
        """
        return self._get(default, names, parse_duration)

    def get_time(self, layout: str, default: datetime, names: Names) -> datetime:
        """
        Returns the first non-empty value parsed with ``layout``, or ``default``

        ``layout`` is either a ``strptime`` format or a Go reference-time layout
        such as ``"2006-01-02 15:04:05"``. Values without zone information are
        returned in UTC.
        """
        return self._get(default, names, lambda value: parse_time(layout, value))

    def load(self) -> Dict[str, str]:
        """Load ./.env into this accessor's store; existing variables win."""
        return load_env(store=self.store)

    def read(self) -> Dict[str, str]:
        """Read ./.env without modifying the environment."""
        return read_env(store=self.store)


__all__ = ["Env", "Names"]
