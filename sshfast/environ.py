"""Swap in the fast ssh-agent socket before handing off to ssh."""

from __future__ import annotations

from typing import Mapping

FAST_AGENT_VAR = "SSH_AUTH_SOCK_FAST"
AGENT_VAR = "SSH_AUTH_SOCK"

EnvPairs = list[tuple[str, str]]


def environ_pairs(environ: Mapping[str, str]) -> EnvPairs:
    """Copy an environment mapping into an ordered list of (name, value)."""
    return list(environ.items())


def to_mapping(pairs: EnvPairs) -> dict[str, str]:
    """Build the insertion-ordered dict that os.execve expects."""
    return dict(pairs)


def has_fast_agent_socket(pairs: EnvPairs) -> bool:
    return any(name == FAST_AGENT_VAR for name, _value in pairs)


def rename_fast_agent_socket(pairs: EnvPairs) -> EnvPairs:
    """Rename SSH_AUTH_SOCK_FAST to SSH_AUTH_SOCK.

    The renamed entry keeps the position of SSH_AUTH_SOCK_FAST, and any
    existing SSH_AUTH_SOCK entry is dropped. Other entries keep their
    relative order. Without SSH_AUTH_SOCK_FAST the input list itself is
    returned.
    """
    if not has_fast_agent_socket(pairs):
        return pairs

    result: EnvPairs = []
    renamed = False
    for name, value in pairs:
        if name == FAST_AGENT_VAR:
            if not renamed:
                result.append((AGENT_VAR, value))
                renamed = True
        elif name != AGENT_VAR:
            result.append((name, value))
    return result
