"""Turn a token list into pipeline groups with their redirections."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

from minishell.expander import expand_double_quoted
from minishell.lexer import Token, TokenType, is_redir_token, is_word_token

ReadLine = Callable[[str], "str | None"]

HEREDOC_PROMPT = "> "


class RedirKind(Enum):
    """How a redirection target is opened."""

    INPUT = auto()
    TRUNCATE = auto()
    APPEND = auto()


@dataclass(frozen=True)
class RedirFile:
    """A file named by ``<``, ``>`` or ``>>``."""

    path: str
    kind: RedirKind

    @property
    def fd(self) -> int:
        """Descriptor the file replaces: 0 for input, 1 for output."""
        return 0 if self.kind is RedirKind.INPUT else 1

    @property
    def flags(self) -> int:
        """Flags for :func:`os.open`."""
        if self.kind is RedirKind.INPUT:
            return os.O_RDONLY
        mode = os.O_APPEND if self.kind is RedirKind.APPEND else os.O_TRUNC
        return os.O_CREAT | os.O_WRONLY | mode


@dataclass
class PipeGroup:
    """One command of a pipeline."""

    command: str | None = None
    args: list[str] = field(default_factory=list)
    inputs: list[RedirFile] = field(default_factory=list)
    outputs: list[RedirFile] = field(default_factory=list)
    heredoc: str | None = None
    is_heredoc_in: bool = False


class _Cursor:
    """A position in a token list."""

    def __init__(self, tokens: Sequence[Token], pos: int = 0) -> None:
        self.tokens = tokens
        self.pos = pos

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> None:
        self.pos += 1

    def skip(self, predicate: Callable[[Token], bool]) -> None:
        while self.current is not None and predicate(self.current):
            self.advance()

    def skip_spaces(self) -> None:
        self.skip(_is_space)

    def join_words(self) -> str | None:
        """Concatenate a run of word tokens; None when there is none."""
        pieces: list[str] = []
        while is_word_token(self.current):
            pieces.append(self.current.text)
            self.advance()
        return "".join(pieces) if pieces else None


def _is_space(token: Token | None) -> bool:
    return token is not None and token.type is TokenType.SPACE


def _is_pipe(token: Token | None) -> bool:
    return token is not None and token.type is TokenType.PIPE


def _read_line_from_stdin(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def read_heredoc(
    delimiter: str,
    last_status: int,
    env: Iterable[str],
    read_line: ReadLine | None = None,
) -> str | None:
    """Collect lines up to ``delimiter`` or end of input, expanding ``$``.

    Returns None when reading is interrupted.
    """
    reader = read_line or _read_line_from_stdin
    entries = list(env)
    lines: list[str] = []
    try:
        while True:
            line = reader(HEREDOC_PROMPT)
            if line is None or line == delimiter:
                break
            if "$" in line:
                line = expand_double_quoted(last_status, line, entries)
            lines.append(line + "\n")
    except KeyboardInterrupt:
        return None
    return "".join(lines)


def _skip_leading_redirections(cursor: _Cursor) -> None:
    cursor.skip_spaces()
    while is_redir_token(cursor.current):
        cursor.advance()
        cursor.skip_spaces()
        if _is_pipe(cursor.current):
            break
        cursor.skip(is_word_token)
        cursor.skip_spaces()
        if _is_pipe(cursor.current):
            break


def _parse_command(cursor: _Cursor) -> str | None:
    _skip_leading_redirections(cursor)
    return cursor.join_words()


def _parse_args(cursor: _Cursor) -> list[str]:
    args: list[str] = []
    cursor.skip_spaces()
    while (token := cursor.current) is not None and not _is_pipe(token):
        if is_redir_token(token):
            cursor.advance()
            cursor.skip_spaces()
            cursor.skip(is_word_token)
        arg = cursor.join_words()
        if arg is not None:
            args.append(arg)
        cursor.skip_spaces()
    return args


def _apply_redirection(
    kind: TokenType,
    target: str,
    group: PipeGroup,
    last_status: int,
    env: Sequence[str],
    read_line: ReadLine,
) -> None:
    if kind is TokenType.REDIR_OUT:
        group.outputs.append(RedirFile(target, RedirKind.TRUNCATE))
    elif kind is TokenType.APPEND:
        group.outputs.append(RedirFile(target, RedirKind.APPEND))
    elif kind is TokenType.HEREDOC:
        group.heredoc = read_heredoc(target, last_status, env, read_line)
        group.is_heredoc_in = True
    else:
        group.inputs.append(RedirFile(target, RedirKind.INPUT))
        group.heredoc = None
        group.is_heredoc_in = False


def _parse_redirections(
    tokens: Sequence[Token],
    start: int,
    group: PipeGroup,
    last_status: int,
    env: Sequence[str],
    read_line: ReadLine,
) -> None:
    cursor = _Cursor(tokens, start)
    cursor.skip(lambda token: not is_redir_token(token) and not _is_pipe(token))
    if _is_pipe(cursor.current):
        return
    while is_redir_token(cursor.current):
        kind = cursor.current.type
        cursor.advance()
        cursor.skip_spaces()
        if is_word_token(cursor.current):
            target = cursor.join_words() or ""
            _apply_redirection(kind, target, group, last_status, env, read_line)
        cursor.skip_spaces()
        cursor.skip(is_word_token)
        cursor.skip_spaces()


def parse_pipeline(
    tokens: Iterable[Token],
    last_status: int = 0,
    env: Iterable[str] = (),
    read_line: ReadLine | None = None,
) -> list[PipeGroup]:
    """Split ``tokens`` at pipes into groups of command, args and redirections.

    Here-documents are read with ``read_line`` as they are met.
    """
    items = list(tokens)
    entries = list(env)
    reader = read_line or _read_line_from_stdin
    cursor = _Cursor(items)
    groups: list[PipeGroup] = []
    while cursor.current is not None:
        start = cursor.pos
        group = PipeGroup()
        cursor.skip_spaces()
        group.command = _parse_command(cursor)
        group.args = _parse_args(cursor)
        _parse_redirections(items, start, group, last_status, entries, reader)
        groups.append(group)
        if _is_pipe(cursor.current):
            cursor.advance()
    return groups


def describe_groups(groups: Iterable[PipeGroup]) -> str:
    """A readable listing of each group's command and arguments."""
    lines: list[str] = []
    for group in groups:
        command = group.command if group.command is not None else "(null)"
        lines.append(f"Command: {command}")
        lines.append("Arguments:")
        lines.extend(f"  [{number}]: {arg}" for number, arg in enumerate(group.args))
    return "".join(line + "\n" for line in lines)