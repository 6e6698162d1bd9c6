"""Process entry point for the ssh launcher.

Thin wrapper installed as a console script, or run as:
python -m sshfast.trampoline [ssh arguments]

Put it on PATH as ``ssh`` ahead of the real client, or call it in place
of ssh. It never returns on success: the process becomes ssh.
"""

from __future__ import annotations

import logging
import os
import sys

from .launcher import launch
from .schema import LauncherConfig


def configure_logging(level: str | None) -> None:
    """Log to stderr at ``level``; unset or unknown levels stay silent."""
    if not level:
        return
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        return
    logging.basicConfig(
        level=numeric,
        format="sshfast: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Entry point for the ssh trampoline."""
    config = LauncherConfig.from_environ(os.environ)
    configure_logging(config.log_level)
    sys.exit(launch(sys.argv, os.environ, config))


if __name__ == "__main__":
    main()
