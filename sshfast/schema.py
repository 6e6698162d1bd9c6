"""Data structures for the ssh launcher."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Mapping

from .registry import DEFAULT_GRAMMAR, get_flag_grammar

logger = logging.getLogger(__name__)

GRAMMAR_ENV = "SSHFAST_GRAMMAR"
LOG_LEVEL_ENV = "SSHFAST_LOG_LEVEL"


class LaunchMode(enum.Enum):
    """Which path the launcher took for an invocation."""

    RECURSIVE = "recursive"  # argv[1] is already -F<path>
    PASSTHROUGH = "passthrough"  # no HOME, or inputs too long
    FAST = "fast"  # host opted in; -F inserted
    NO_MATCH = "no_match"


@dataclass
class LaunchPlan:
    """Arguments and environment to hand to the real ssh.

    Attributes:
        argv: Argument list; argv[0] is the program name as invoked
        env: Environment, in the original variable order
        mode: Which decision produced this plan
        config_path: ssh config file consulted, if any
    """

    argv: list[str]
    env: dict[str, str] = field(default_factory=dict)
    mode: LaunchMode = LaunchMode.NO_MATCH
    config_path: str | None = None


@dataclass
class LauncherConfig:
    """Runtime settings of the launcher.

    Attributes:
        program: Name of the real client to look up on PATH
        grammar: OpenSSH version whose flag grammar is used for parsing
        log_level: Logging level name, or None to stay silent
    """

    program: str = "ssh"
    grammar: str = DEFAULT_GRAMMAR
    log_level: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "LauncherConfig":
        """Build settings from SSHFAST_* environment variables."""
        grammar = environ.get(GRAMMAR_ENV, "").strip() or DEFAULT_GRAMMAR
        log_level = environ.get(LOG_LEVEL_ENV, "").strip() or None
        return cls(grammar=grammar, log_level=log_level)

    def flags_with_arg(self) -> frozenset[str]:
        """Value-taking flag letters for the configured grammar."""
        letters = get_flag_grammar(self.grammar)
        if letters is None:
            logger.warning(
                "Unknown ssh flag grammar %r, using %s", self.grammar, DEFAULT_GRAMMAR
            )
            letters = get_flag_grammar(DEFAULT_GRAMMAR) or frozenset()
        return letters
