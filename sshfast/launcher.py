"""Decide how to launch ssh, then exec it.

plan_launch() is pure apart from reading the ssh config file, so it is
fully testable with tmp_path fixtures. launch() adds the PATH search and
the exec itself.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Sequence

from .environ import (
    environ_pairs,
    has_fast_agent_socket,
    rename_fast_agent_socket,
    to_mapping,
)
from .matcher import is_fast_host
from .pathexec import Execve, exec_from_path, resolve_self
from .schema import LaunchMode, LaunchPlan, LauncherConfig

logger = logging.getLogger(__name__)

CONFIG_FLAG = "-F"
CONFIG_SUFFIX = "/.ssh/config"

# Room for argv plus the inserted -F argument and a terminator
MAX_ARGS = 256
# Longest -F<path> argument we build, terminator included
MAX_CONFIG_ARG = 256

EXIT_STATUS = 121


def build_config_arg(home: str | None) -> str | None:
    """Return ``-F$HOME/.ssh/config``, or None if it cannot be built.

    Args:
        home: Value of HOME, or None if unset

    Returns:
        The argument, or None if HOME is unset or the argument is too long.
    """
    if home is None:
        return None
    config_arg = f"{CONFIG_FLAG}{home}{CONFIG_SUFFIX}"
    if len(os.fsencode(config_arg)) + 1 > MAX_CONFIG_ARG:
        return None
    return config_arg


def _recursive_config_path(argv: Sequence[str]) -> str | None:
    """Return the path of a leading ``-F<path>`` argument, if any."""
    if len(argv) < 2:
        return None
    first = argv[1]
    if first.startswith(CONFIG_FLAG) and len(first) > len(CONFIG_FLAG):
        return first[len(CONFIG_FLAG):]
    return None


def plan_launch(
    argv: Sequence[str],
    environ: Mapping[str, str],
    config: LauncherConfig | None = None,
) -> LaunchPlan:
    """Work out the arguments and environment to run ssh with.

    Cases, checked in order:
    1. argv[1] is ``-F<path>`` (we already ran once in this chain): keep
       argv, rename the fast agent socket if the host is listed in <path>.
    2. HOME is unset, or argv or the -F argument would be too long: change
       nothing.
    3. The host is listed in $HOME/.ssh/config: insert ``-F<that path>``
       after argv[0] and rename the fast agent socket.
    4. Otherwise change nothing.

    Args:
        argv: Full argument list, argv[0] included
        environ: Process environment
        config: Launcher settings (defaults to LauncherConfig())

    Returns:
        LaunchPlan with the chosen argv, env and mode.
    """
    if config is None:
        config = LauncherConfig()
    flags_with_arg = config.flags_with_arg()
    pairs = environ_pairs(environ)
    args = list(argv)

    recursive_path = _recursive_config_path(argv)
    if recursive_path is not None:
        if has_fast_agent_socket(pairs) and is_fast_host(
            recursive_path, args[1:], flags_with_arg
        ):
            pairs = rename_fast_agent_socket(pairs)
        return LaunchPlan(
            argv=args,
            env=to_mapping(pairs),
            mode=LaunchMode.RECURSIVE,
            config_path=recursive_path,
        )

    config_arg = None
    if len(args) <= MAX_ARGS - 2:
        config_arg = build_config_arg(environ.get("HOME"))
    if config_arg is None:
        logger.debug("Passing through: HOME unset or arguments too long")
        return LaunchPlan(argv=args, env=to_mapping(pairs), mode=LaunchMode.PASSTHROUGH)

    config_path = config_arg[len(CONFIG_FLAG):]
    if not is_fast_host(config_path, args[1:], flags_with_arg):
        return LaunchPlan(
            argv=args,
            env=to_mapping(pairs),
            mode=LaunchMode.NO_MATCH,
            config_path=config_path,
        )

    return LaunchPlan(
        argv=[args[0], config_arg, *args[1:]],
        env=to_mapping(rename_fast_agent_socket(pairs)),
        mode=LaunchMode.FAST,
        config_path=config_path,
    )


def launch(
    argv: Sequence[str],
    environ: Mapping[str, str],
    config: LauncherConfig | None = None,
    execve: Execve | None = None,
) -> int:
    """Exec the real ssh with the planned arguments and environment.

    Args:
        argv: Full argument list, argv[0] included
        environ: Process environment
        config: Launcher settings (defaults to LauncherConfig())
        execve: Override for os.execve (for testing)

    Returns:
        EXIT_STATUS, and only if ssh could not be executed at all.
    """
    if config is None:
        config = LauncherConfig()

    plan = plan_launch(argv, environ, config)
    logger.debug("Launch mode %s: %s", plan.mode.value, plan.argv)

    argv0 = argv[0] if argv else ""
    self_path = resolve_self(argv0, environ)
    exec_argv = plan.argv or [config.program]
    exec_from_path(config.program, exec_argv, plan.env, skip=self_path, execve=execve)

    sys.stderr.write(f"fatal: {config.program} not found\n")
    return EXIT_STATUS
