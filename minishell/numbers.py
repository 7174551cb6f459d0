"""Numeric argument checks used by the ``exit`` builtin."""

from __future__ import annotations

_SPACES = " \t\n\v\f\r"
_DIGITS = "0123456789"
_MAX_DIGITS = 18


def _skip_spaces(text: str, pos: int = 0) -> int:
    while pos < len(text) and text[pos] in _SPACES:
        pos += 1
    return pos


def is_nbr(arg: str | None) -> bool:
    """True when ``arg`` is an optionally signed integer with surrounding blanks."""
    if arg is None:
        return False
    pos = _skip_spaces(arg)
    if pos < len(arg) and arg[pos] in "+-":
        pos += 1
    if pos >= len(arg) or arg[pos] in _SPACES:
        return False
    while pos < len(arg) and arg[pos] not in _SPACES:
        if arg[pos] not in _DIGITS:
            return False
        pos += 1
    return _skip_spaces(arg, pos) == len(arg)


def atoll(arg: str) -> int:
    """Read a leading signed integer from ``arg``; 0 when there is none."""
    pos = _skip_spaces(arg)
    sign = 1
    if pos < len(arg) and arg[pos] in "+-":
        if arg[pos] == "-":
            sign = -1
        pos += 1
    number = 0
    while pos < len(arg) and arg[pos] in _DIGITS:
        number = number * 10 + int(arg[pos])
        pos += 1
    return sign * number


def is_valid_exit_range(arg: str) -> bool:
    """True when the text after blanks and sign has at most 18 characters."""
    pos = _skip_spaces(arg)
    if pos < len(arg) and arg[pos] in "+-":
        pos += 1
    return len(arg) - pos <= _MAX_DIGITS