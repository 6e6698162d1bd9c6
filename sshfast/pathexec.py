"""PATH search and exec that can step over one candidate (ourselves).

When installed as ``ssh`` earlier on PATH, a plain os.execvp("ssh", ...)
would find this launcher again. exec_from_path() skips that one path and
tries the rest in PATH order.
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import Callable, Iterator, Mapping, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATH = "/bin:/usr/bin"  # libc default
PATH_MAX = 4096

Execve = Callable[[str, Sequence[str], Mapping[str, str]], None]


def _same_path(candidate: str, skip: str) -> bool:
    """Compare a candidate to an absolute path, normalizing when possible."""
    if os.path.isabs(candidate):
        return os.path.normpath(candidate) == skip
    try:
        return os.path.abspath(candidate) == skip
    except OSError:
        # cwd is gone; relative candidates cannot be us
        return False


def iter_candidates(
    program: str, search_path: str, skip: str | None = None
) -> Iterator[str]:
    """Yield ``<dir>/<program>`` for each PATH directory, in order.

    An empty entry means the current directory, as with execvp.
    Candidates that would not fit in PATH_MAX bytes (including the
    terminator) are dropped silently, as is the candidate equal to
    ``skip``.

    Args:
        program: Program name, assumed not to contain "/"
        search_path: Colon-separated directory list
        skip: Absolute path to leave out

    Yields:
        Candidate paths to try.
    """
    for directory in search_path.split(":"):
        candidate = f"{directory or '.'}/{program}"
        if len(os.fsencode(candidate)) + 1 > PATH_MAX:
            continue
        if skip is not None and _same_path(candidate, skip):
            logger.debug("Skipping %s (this launcher)", candidate)
            continue
        yield candidate


def exec_from_path(
    program: str,
    args: Sequence[str],
    env: Mapping[str, str],
    skip: str | None = None,
    execve: Execve | None = None,
) -> None:
    """Replace the current process with ``program`` found on PATH.

    Every candidate is tried in turn whatever the reason its exec failed,
    like libc's execvp. Each attempt runs with argv[0] set to the
    candidate path.

    Args:
        program: Program name to look up
        args: Full argument list; args[0] is replaced by the candidate
        env: Environment for the new program (also supplies PATH)
        skip: Absolute path that must not be executed
        execve: Override for os.execve (for testing)

    Returns:
        None, and only if no candidate could be executed.
    """
    if execve is None:
        execve = os.execve
    search_path = env.get("PATH", DEFAULT_SEARCH_PATH)

    for candidate in iter_candidates(program, search_path, skip=skip):
        try:
            execve(candidate, [candidate, *args[1:]], env)
        except OSError as e:
            logger.debug("exec %s failed: %s", candidate, e)
            continue
        # A real execve never returns; an injected one may.
        return


def resolve_self(argv0: str, env: Mapping[str, str]) -> str | None:
    """Return the absolute path this process was started from.

    Args:
        argv0: The program name as invoked
        env: Environment supplying PATH for bare names

    Returns:
        An absolute path, or None if it cannot be determined.
    """
    if not argv0:
        return None
    found = argv0 if "/" in argv0 else shutil.which(
        argv0, path=env.get("PATH", DEFAULT_SEARCH_PATH)
    )
    if not found:
        return None
    try:
        return os.path.abspath(found)
    except OSError:
        return None
