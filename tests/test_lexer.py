import pytest

from minishell.lexer import (
    ShellSyntaxError,
    Token,
    TokenType,
    check_syntax_errors,
    is_redir_token,
    is_word_token,
    join_tokens,
    token_type,
    tokenize,
)


def test_simple_command_tokens():
    assert tokenize("echo hello") == [
        Token(TokenType.WORD, "echo"),
        Token(TokenType.SPACE, " "),
        Token(TokenType.WORD, "hello"),
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("|", TokenType.PIPE),
        ("<", TokenType.REDIR_IN),
        (">", TokenType.REDIR_OUT),
        (">>", TokenType.APPEND),
        ("<<", TokenType.HEREDOC),
        ("'", TokenType.S_QUOTED),
        ('"', TokenType.D_QUOTED),
        ("ls", TokenType.WORD),
        ("<>", TokenType.WORD),
    ],
)
def test_token_type(text, expected):
    assert token_type(text) is expected


def test_operators_and_quotes():
    tokens = tokenize("cat << end | grep 'a b' >> \"out\"")
    types = [t.type for t in tokens if t.type is not TokenType.SPACE]
    assert types == [
        TokenType.WORD,
        TokenType.HEREDOC,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
        TokenType.S_QUOTED,
        TokenType.APPEND,
        TokenType.D_QUOTED,
    ]
    assert Token(TokenType.S_QUOTED, "'a b'") in tokens


@pytest.mark.parametrize("text", ["$?", "$HOME", "$1", "$"])
def test_variable_fields(text):
    tokens = tokenize("echo " + text)
    assert tokens[-1] == Token(TokenType.EXP_FIELD, text)


def test_variable_with_underscore_and_digit_rules():
    tokens = tokenize("$A_1x$12")
    assert [t.text for t in tokens] == ["$A_1x", "$1", "2"]


def test_variable_before_quote_keeps_both_tokens():
    tokens = tokenize("$'ab'")
    assert tokens == [
        Token(TokenType.S_QUOTED, "'ab'"),
        Token(TokenType.EXP_FIELD, "$'ab'"),
    ]


@pytest.mark.parametrize(
    "text",
    ["echo hi", "ls -l | wc -l", "a>b<c", "echo \"x $Y\" 'z'", "  cat\t<< EOF "],
)
def test_join_round_trip(text):
    assert join_tokens(tokenize(text)) == text


@pytest.mark.parametrize(
    "text", ["echo 'abc", 'echo "abc', "$'x", "| ls", "ls | | wc", "ls >", "ls > | wc"]
)
def test_syntax_errors(text):
    with pytest.raises(ShellSyntaxError):
        tokenize(text)


def test_syntax_error_status():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("ls |")
    assert info.value.status == 258


def test_check_syntax_errors_accepts_valid():
    tokens = [Token(TokenType.WORD, "ls"), Token(TokenType.PIPE, "|"), Token(TokenType.WORD, "wc")]
    assert check_syntax_errors(tokens) is None
    with pytest.raises(ShellSyntaxError):
        check_syntax_errors(tokens[:2])


def test_token_predicates():
    assert is_word_token(Token(TokenType.EXP_FIELD, "$A"))
    assert is_word_token(Token(TokenType.D_QUOTED, '"a"'))
    assert not is_word_token(Token(TokenType.SPACE, " "))
    assert not is_word_token(None)
    assert is_redir_token(Token(TokenType.HEREDOC, "<<"))
    assert not is_redir_token(Token(TokenType.PIPE, "|"))
    assert not is_redir_token(None)


def test_empty_input():
    assert tokenize("") == []