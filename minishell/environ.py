"""Environment variable storage with the lookup rules the shell relies on."""

from __future__ import annotations

import string
from collections.abc import Iterable, Iterator, Mapping

from minishell.numbers import atoll, is_nbr

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_REST = frozenset(string.ascii_letters + string.digits + "_")


def env_var_name(entry: str) -> str:
    """Return the part of ``entry`` before the first ``=``, or all of it."""
    return entry.partition("=")[0]


def env_var_value(entry: str) -> str | None:
    """Return the value after the first ``=``; None when absent or empty."""
    _, sep, value = entry.partition("=")
    if not sep or not value:
        return None
    return value


def is_export_arg_valid(arg: str) -> bool:
    """Check that the name part of an ``export`` argument is an identifier."""
    if not arg or arg[0] not in _NAME_START:
        return False
    return all(ch in _NAME_REST for ch in env_var_name(arg)[1:])


def is_unset_arg_valid(arg: str) -> bool:
    """Check that an ``unset`` argument is an identifier as a whole."""
    if not arg or arg[0] not in _NAME_START:
        return False
    return all(ch in _NAME_REST for ch in arg[1:])


class Environment:
    """An ordered list of ``NAME=value`` (or bare ``NAME``) entries.

    A lookup matches the first entry whose text begins with the searched
    name; new variables are inserted at the front.
    """

    def __init__(self, entries: Iterable[str] | Mapping[str, str] = ()) -> None:
        if isinstance(entries, Mapping):
            self._entries = [f"{name}={value}" for name, value in entries.items()]
        else:
            self._entries = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.index(name) is not None

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"

    def index(self, name: str) -> int | None:
        """Position of the first entry matching ``name``, or None."""
        prefix = env_var_name(name)
        for position, entry in enumerate(self._entries):
            if entry.startswith(prefix):
                return position
        return None

    def get(self, name: str) -> str | None:
        """Value of ``name``; None when unset, valueless or empty."""
        position = self.index(name)
        if position is None:
            return None
        return env_var_value(self._entries[position])

    def set(self, entry: str) -> None:
        """Replace the matching entry, or insert ``entry`` at the front."""
        position = self.index(entry)
        if position is None:
            self._entries.insert(0, entry)
        else:
            self._entries[position] = entry

    def remove(self, name: str) -> None:
        """Drop the entry matching ``name`` if there is one."""
        position = self.index(name)
        if position is not None:
            del self._entries[position]

    def entries(self) -> list[str]:
        """All entries in their current order."""
        return list(self._entries)

    def sorted_entries(self) -> list[str]:
        """All entries in byte order, as ``export`` lists them."""
        return sorted(self._entries, key=lambda entry: entry.encode())

    def as_dict(self) -> dict[str, str]:
        """Entries holding ``=`` as a mapping; the first of a name wins."""
        result: dict[str, str] = {}
        for entry in self._entries:
            name, sep, value = entry.partition("=")
            if sep:
                result.setdefault(name, value)
        return result

    def bump_shlvl(self) -> None:
        """Raise SHLVL by one, resetting it when the current value is unusable."""
        if self.index("SHLVL") is None:
            self.set("SHLVL=1")
            return
        value = self.get("SHLVL")
        if value is not None and len(value) < 4 and is_nbr(value):
            level = atoll(value)
            if level >= 0:
                self.set(f"SHLVL={level + 1}")
            else:
                self.set("SHLVL=0")
            return
        self.set("SHLVL=1")

    def copy(self) -> Environment:
        """An independent copy."""
        return Environment(self._entries)