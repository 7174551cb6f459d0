"""Split a command line into tokens and check them for syntax errors."""

from __future__ import annotations

import string
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

_SPACES = frozenset(" \t\n\v\f\r")
_SEPARATORS = frozenset("|<>")
_QUOTES = frozenset("'\"")
_DIGITS = frozenset(string.digits)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_NAME_CHARS = _ALNUM | {"_"}


class TokenType(Enum):
    """Kinds of token produced by :func:`tokenize`."""

    WORD = auto()
    PIPE = auto()
    REDIR_OUT = auto()
    REDIR_IN = auto()
    HEREDOC = auto()
    APPEND = auto()
    S_QUOTED = auto()
    D_QUOTED = auto()
    EXP_FIELD = auto()
    SPACE = auto()


_OPERATORS = frozenset(
    {
        TokenType.PIPE,
        TokenType.REDIR_OUT,
        TokenType.REDIR_IN,
        TokenType.HEREDOC,
        TokenType.APPEND,
    }
)
_REDIRECTIONS = _OPERATORS - {TokenType.PIPE}
_WORDS = frozenset(
    {TokenType.WORD, TokenType.EXP_FIELD, TokenType.D_QUOTED, TokenType.S_QUOTED}
)


@dataclass(frozen=True)
class Token:
    """One lexical token: its kind and the exact text it covers."""

    type: TokenType
    text: str


class ShellSyntaxError(Exception):
    """Raised for unterminated quotes and misplaced operators."""

    status = 258


def token_type(text: str) -> TokenType:
    """Classify an operator or quote character; anything else is a word."""
    single = {
        "|": TokenType.PIPE,
        "<": TokenType.REDIR_IN,
        ">": TokenType.REDIR_OUT,
        "'": TokenType.S_QUOTED,
        '"': TokenType.D_QUOTED,
    }
    double = {">>": TokenType.APPEND, "<<": TokenType.HEREDOC}
    if len(text) == 1 and text in single:
        return single[text]
    if len(text) == 2 and text in double:
        return double[text]
    return TokenType.WORD


def is_word_token(token: Token | None) -> bool:
    """True for tokens that make up command words."""
    return token is not None and token.type in _WORDS


def is_redir_token(token: Token | None) -> bool:
    """True for ``<``, ``>``, ``>>`` and ``<<``."""
    return token is not None and token.type in _REDIRECTIONS


def _quote_end(text: str, pos: int) -> int:
    """Index just past the quote that closes the one at ``pos``."""
    end = text.find(text[pos], pos + 1)
    if end == -1:
        raise ShellSyntaxError("msh: syntax error unterminated quotes")
    return end + 1


def _lex_variable(text: str, pos: int, tokens: list[Token]) -> int:
    start = pos + 1
    end = start
    if end < len(text):
        ch = text[end]
        if ch == "?" or ch in _DIGITS:
            end += 1
        elif ch in _ALNUM:
            while end < len(text) and text[end] in _NAME_CHARS:
                end += 1
        elif ch in _QUOTES:
            end = _quote_end(text, start)
            tokens.append(Token(token_type(ch), text[start:end]))
    tokens.append(Token(TokenType.EXP_FIELD, text[pos:end]))
    return end


def _lex_word(text: str, pos: int) -> int:
    end = pos
    while end < len(text):
        ch = text[end]
        if ch in _SPACES or ch in _SEPARATORS or ch in _QUOTES or ch == "$":
            break
        end += 1
    return end


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, raising ShellSyntaxError on bad input."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in _SPACES:
            tokens.append(Token(TokenType.SPACE, ch))
            pos += 1
        elif ch in _SEPARATORS:
            length = 2 if text.startswith((">>", "<<"), pos) else 1
            piece = text[pos:pos + length]
            tokens.append(Token(token_type(piece), piece))
            pos += length
        elif ch in _QUOTES:
            end = _quote_end(text, pos)
            tokens.append(Token(token_type(ch), text[pos:end]))
            pos = end
        elif ch == "$":
            pos = _lex_variable(text, pos, tokens)
        else:
            end = _lex_word(text, pos)
            piece = text[pos:end]
            tokens.append(Token(token_type(piece), piece))
            pos = end
    check_syntax_errors(tokens)
    return tokens


def _next_significant(tokens: list[Token], pos: int) -> Token | None:
    for token in tokens[pos:]:
        if token.type is not TokenType.SPACE:
            return token
    return None


def check_syntax_errors(tokens: Iterable[Token]) -> None:
    """Reject a leading pipe and an operator followed by an operator or nothing."""
    items = list(tokens)
    first = _next_significant(items, 0)
    if first is not None and first.type is TokenType.PIPE:
        raise ShellSyntaxError("msh:  unexpected token")
    for position, token in enumerate(items):
        if token.type not in _OPERATORS:
            continue
        following = _next_significant(items, position + 1)
        if following is None or following.type in _OPERATORS:
            raise ShellSyntaxError("msh: syntax error near unexpected token")


def join_tokens(tokens: Iterable[Token]) -> str:
    """Concatenate the text of all tokens."""
    return "".join(token.text for token in tokens)