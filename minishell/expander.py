"""Expansion of ``$NAME`` and ``$?`` in command arguments."""

from __future__ import annotations

import string
from collections.abc import Iterable

_SPACES = frozenset(" \t\n\v\f\r")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def expand_var(status: int, text: str, env: Iterable[str]) -> str:
    """Expand ``text`` when it starts with ``$``; otherwise return it unchanged.

    Everything after the ``$`` is taken as the variable name.
    """
    if not text.startswith("$"):
        return text
    rest = text[1:]
    if not rest or rest[0] in _SPACES:
        return "$"
    if rest[0] == "?":
        return str(status)
    for entry in env:
        if entry.startswith(rest) and entry[len(rest):len(rest) + 1] == "=":
            return entry[len(rest) + 1:]
    return ""


def expand_double_quoted(status: int, text: str, env: Iterable[str]) -> str:
    """Expand every ``$NAME`` and ``$?`` inside ``text``, keeping all else."""
    entries = list(env)
    pieces: list[str] = []
    pos = 0
    while pos < len(text):
        if text[pos] != "$":
            pieces.append(text[pos])
            pos += 1
            continue
        end = pos + 1
        if text[end:end + 1] == "?":
            end += 1
        else:
            while end < len(text) and text[end] in _NAME_CHARS:
                end += 1
        pieces.append(expand_var(status, text[pos:end], entries))
        pos = end
    return "".join(pieces)


def expand_unquoted(status: int, text: str, env: Iterable[str]) -> str:
    """Expand an unquoted argument."""
    return expand_var(status, text, env)


def expand_arg(status: int, arg: str, env: Iterable[str]) -> str:
    """Expand one argument according to its leading character."""
    if arg.startswith("$"):
        return expand_var(status, arg, env)
    if arg.startswith('"'):
        return expand_double_quoted(status, arg, env)
    if arg.startswith("'"):
        return arg.strip("'")
    return expand_unquoted(status, arg, env)


def expand_groups(status: int, groups: Iterable, env: Iterable[str]) -> None:
    """Expand the ``args`` of every group in place."""
    entries = list(env)
    for group in groups:
        if group.args:
            group.args = [expand_arg(status, arg, entries) for arg in group.args]