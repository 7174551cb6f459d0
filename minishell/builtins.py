"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import string
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from minishell.environ import (
    Environment,
    env_var_name,
    env_var_value,
    is_export_arg_valid,
    is_unset_arg_valid,
)
from minishell.numbers import atoll, is_nbr, is_valid_exit_range

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass
class ShellState:
    """What a builtin may read and change: environment, status and streams."""

    environment: Environment = field(default_factory=Environment)
    last_status: int = 0
    cmds_num: int = 1
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


Builtin = Callable[[Sequence[str], ShellState], int]


def strip_flag(flag: str, args: Sequence[str]) -> tuple[bool, list[str]]:
    """Drop leading ``-f``, ``-ff``... arguments; report whether any were there."""
    items = list(args)
    option = "-" + flag

    def is_flag(arg: str) -> bool:
        return arg.startswith(option) and all(ch == flag for ch in arg[1:])

    count = 0
    for arg in items:
        if not is_flag(arg):
            break
        count += 1
    return count > 0, items[count:]


def echo(args: Sequence[str], state: ShellState) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    suppress_newline, words = strip_flag("n", args)
    state.stdout.write(" ".join(words))
    if not suppress_newline:
        state.stdout.write("\n")
    return 0


def pwd(args: Sequence[str], state: ShellState) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as error:
        state.stderr.write(
            f"msh: pwd: error getting current directory: {error.strerror}\n"
        )
        return 1
    state.stdout.write(cwd + "\n")
    return 0


def _update_oldpwd(environment: Environment) -> None:
    if environment.index("PWD") is None:
        return
    previous = environment.get("PWD")
    if previous is not None:
        environment.set(f"OLDPWD={previous}")


def _update_pwd(environment: Environment) -> None:
    try:
        cwd = os.getcwd()
    except OSError:
        return
    if environment.index("PWD") is not None:
        environment.set(f"PWD={cwd}")


def cd(args: Sequence[str], state: ShellState) -> int:
    """Change directory to the argument, to HOME, or to OLDPWD for ``-``."""
    environment = state.environment
    target: str | None
    if not args:
        if environment.index("HOME") is None:
            state.stderr.write("cd: HOME not set\n")
            return 1
        target = environment.get("HOME")
    else:
        target = args[0]
    if target is None:
        return 1
    if target == "-":
        target = environment.get("OLDPWD") if "OLDPWD" in environment else None
        if target is None:
            state.stderr.write("cd: OLDPWD not set\n")
            return 1
    if target:
        try:
            os.chdir(target)
        except OSError as error:
            state.stderr.write(f"msh: cd: {target}: {error.strerror}\n")
            return 1
    _update_oldpwd(environment)
    _update_pwd(environment)
    return 0


def format_export_listing(environment: Environment) -> str:
    """All variables in byte order as ``declare -x NAME="value"`` lines."""
    lines = []
    for entry in environment.sorted_entries():
        value = env_var_value(entry)
        line = f"declare -x {env_var_name(entry)}"
        if value is not None:
            line += f'="{value}"'
        lines.append(line + "\n")
    return "".join(lines)


def export(args: Sequence[str], state: ShellState) -> int:
    """Set variables, or list them all when called without arguments."""
    if not args:
        state.stdout.write(format_export_listing(state.environment))
        return 0
    status = 0
    for arg in args:
        if is_export_arg_valid(arg):
            if state.cmds_num == 1:
                state.environment.set(arg)
        else:
            state.stderr.write(f"msh: export: `{arg}': not a valid identifier\n")
            status = 1
    return status


def unset(args: Sequence[str], state: ShellState) -> int:
    """Remove the named variables."""
    status = 0
    for arg in args:
        if is_unset_arg_valid(arg):
            if state.cmds_num == 1:
                state.environment.remove(arg)
        else:
            state.stderr.write(f"msh: unset: `{arg}': not a valid identifier\n")
            status = 1
    return status


def env(args: Sequence[str], state: ShellState) -> int:
    """Print every variable that has a value part."""
    for entry in state.environment.entries():
        if "=" in entry:
            state.stdout.write(entry + "\n")
    return 0


def exit_(args: Sequence[str], state: ShellState) -> int:
    """Leave the shell by raising ShellExit; returns 1 on too many arguments."""
    exit_arg = args[0] if args else str(state.last_status)
    if not is_nbr(exit_arg) or not is_valid_exit_range(exit_arg):
        state.stderr.write("msh: exit: numeric argument required\n")
        _announce_exit(state)
        raise ShellExit(255)
    if len(args) >= 2:
        state.stderr.write("msh: exit: too many arguments\n")
        return 1
    _announce_exit(state)
    raise ShellExit(atoll(exit_arg) % 256)


def _announce_exit(state: ShellState) -> None:
    if state.cmds_num == 1:
        state.stdout.write("exit\n")


BUILTINS: dict[str, Builtin] = {
    "echo": echo,
    "cd": cd,
    "pwd": pwd,
    "export": export,
    "unset": unset,
    "env": env,
    "exit": exit_,
}


def find_builtin(name: str | None) -> Builtin | None:
    """The builtin called ``name``, matched exactly or ignoring ASCII case."""
    if name is None:
        return None
    found = BUILTINS.get(name)
    if found is not None:
        return found
    return BUILTINS.get(name.translate(_ASCII_LOWER))