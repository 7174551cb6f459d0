from dataclasses import dataclass, field

import pytest

from minishell.environ import Environment
from minishell.expander import (
    expand_arg,
    expand_double_quoted,
    expand_groups,
    expand_unquoted,
    expand_var,
)


@pytest.fixture
def env():
    return Environment(["HOME=/home/user", "USER=alice", "EMPTY="])


@dataclass
class _Group:
    args: list = field(default_factory=list)


def test_expand_known_variable(env):
    assert expand_var(0, "$HOME", env) == "/home/user"
    assert expand_var(0, "$USER", env) == "alice"


def test_expand_status(env):
    assert expand_var(42, "$?", env) == "42"
    assert expand_var(7, "$?abc", env) == "7"


@pytest.mark.parametrize("text", ["$", "$ x"])
def test_lone_dollar(env, text):
    assert expand_var(0, text, env) == "$"


def test_unknown_and_prefix_names_expand_to_empty(env):
    assert expand_var(0, "$NOPE", env) == ""
    assert expand_var(0, "$HOM", env) == ""
    assert expand_var(0, "$EMPTY", env) == ""


@pytest.mark.parametrize("text", ["plain", "", "a$HOME", "-n"])
def test_text_without_leading_dollar_is_unchanged(env, text):
    assert expand_var(0, text, env) == text
    assert expand_unquoted(0, text, env) == text


def test_double_quoted_expands_inside(env):
    result = expand_double_quoted(3, '"$USER:$?"', env)
    assert result == '"alice:3"'


@pytest.mark.parametrize("text", ['"no vars"', "abc def", '"a $ b"', "$"])
def test_double_quoted_without_names_is_unchanged(env, text):
    assert expand_double_quoted(0, text, env) == text


def test_double_quoted_matches_expand_var_for_single_name(env):
    assert expand_double_quoted(0, "$HOME", env) == expand_var(0, "$HOME", env)


def test_expand_arg_dispatch(env):
    assert expand_arg(0, "$HOME", env) == "/home/user"
    assert expand_arg(0, "'$HOME'", env) == "$HOME"
    assert expand_arg(0, "word", env) == "word"
    assert expand_arg(5, '"$?"', env) == expand_double_quoted(5, '"$?"', env)


def test_expand_groups_in_place(env):
    groups = [_Group(["$USER", "'x'"]), _Group([]), _Group(["$?"])]
    expand_groups(9, groups, env)
    assert groups[0].args == ["alice", "x"]
    assert groups[1].args == []
    assert groups[2].args == ["9"]


def test_plain_entries_list_works():
    assert expand_var(0, "$A", ["A=1", "A=2"]) == "1"