"""Find the destination host in an ssh command line."""

from __future__ import annotations

from typing import Sequence

from .registry import DEFAULT_GRAMMAR, get_flag_grammar


def find_host_arg(
    args: Sequence[str], flags_with_arg: frozenset[str] | None = None
) -> str | None:
    """Return the destination argument, skipping flags and their values.

    Mirrors ssh's getopt grammar: a value-taking letter at the end of a
    flag token consumes the next token. ``--`` ends option parsing.

    Args:
        args: Command-line arguments, without the program name
        flags_with_arg: Value-taking flag letters (defaults to the
            default registered grammar)

    Returns:
        The ``[user@]host`` argument, or None if there is none.
    """
    if flags_with_arg is None:
        flags_with_arg = get_flag_grammar(DEFAULT_GRAMMAR) or frozenset()

    i = 0
    while i < len(args):
        arg = args[i]
        i += 1
        if not arg.startswith("-"):
            return arg
        if arg == "--":
            return args[i] if i < len(args) else None
        letters = arg[1:]
        for pos, letter in enumerate(letters):
            if letter in flags_with_arg:
                if pos == len(letters) - 1:
                    i += 1  # value is the next token
                break
    return None


def extract_hostname(
    args: Sequence[str], flags_with_arg: frozenset[str] | None = None
) -> str | None:
    """Return the hostname ssh would connect to, without any ``user@``.

    Examples:
        ["-p", "22", "user@host"] -> "host"
        ["-l", "user", "host"] -> "host"
    """
    host_arg = find_host_arg(args, flags_with_arg)
    if host_arg is None:
        return None
    _user, at, hostname = host_arg.partition("@")
    return hostname if at else host_arg
