# minishell

The building blocks of a small command shell. The package splits command
lines into tokens, checks their syntax, groups them into pipelines with
redirections and here-documents, expands `$NAME` and `$?`, keeps an ordered
environment, and provides the shell's builtin commands.

## Installing

    pip install .

## Modules

- `minishell.lexer`: `tokenize(text)` returns a list of `Token` objects
  (each with a `TokenType` and its text). Unterminated quotes, a leading pipe,
  or an operator followed by another operator or by nothing raise
  `ShellSyntaxError`, whose `status` is 258. Also `token_type`,
  `check_syntax_errors`, `join_tokens`, `is_word_token` and `is_redir_token`.
- `minishell.parser`: `parse_pipeline(tokens, last_status, env, read_line)`
  splits the tokens at pipes into `PipeGroup` objects holding `command`,
  `args`, `inputs` and `outputs` (lists of `RedirFile`, with a `RedirKind`,
  `fd` and `os.open` `flags`), and any here-document text. Here-documents are
  read through `read_line(prompt)`, which defaults to `input()`; see also
  `read_heredoc` and `describe_groups`.
- `minishell.expander`: `expand_var`, `expand_double_quoted`,
  `expand_unquoted`, `expand_arg`, and `expand_groups`, which expands the
  `args` of each group in place.
- `minishell.environ`: `Environment`, an ordered list of `NAME=value` entries
  with `get`, `set` (new entries go to the front), `remove`, `entries`,
  `sorted_entries`, `as_dict`, `copy` and `bump_shlvl`. Also `env_var_name`,
  `env_var_value`, `is_export_arg_valid` and `is_unset_arg_valid`.
- `minishell.numbers`: `is_nbr`, `atoll` and `is_valid_exit_range`, the
  numeric checks behind `exit`.
- `minishell.builtins`: `echo` (with `-n`), `cd` (with `-` for the previous
  directory), `pwd`, `export`, `unset`, `env` and `exit_`, each called as
  `builtin(args, state)` with a `ShellState` and returning a status. `exit_`
  raises `ShellExit` carrying the status. `find_builtin(name)` looks a builtin
  up, ignoring ASCII case; `strip_flag` and `format_export_listing` are the
  helpers behind `echo -n` and `export` without arguments.

## Example

    import os

    from minishell.builtins import ShellState, find_builtin
    from minishell.environ import Environment
    from minishell.expander import expand_groups
    from minishell.lexer import tokenize
    from minishell.parser import parse_pipeline

    environment = Environment(os.environ)
    environment.bump_shlvl()
    state = ShellState(environment=environment)

    groups = parse_pipeline(tokenize("echo -n $HOME > out.txt"),
                            state.last_status, environment.entries())
    expand_groups(state.last_status, groups, environment.entries())

    group = groups[0]
    builtin = find_builtin(group.command)
    state.last_status = builtin(group.args, state)

## What it does not do

The package has no command-line program and no read–execute loop: nothing in
it reads a prompt, starts external programs, connects pipelines, or opens the
redirection files a `PipeGroup` names. Those steps are left to the caller,
using the groups, `RedirFile.flags` and `RedirFile.fd` that the parser
produces.

## Tests

    pip install .[test]
    pytest