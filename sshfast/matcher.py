"""Streaming search for ``Host .fast`` marker lines in an ssh config file.

The file is read in fixed-size chunks and fed to a MarkerScanner, which
keeps its partial-match state between chunks. Memory use does not depend
on file size or line length.

A marker line looks like::

    Host .fast  alpha beta gamma

Hostnames are compared byte-for-byte. No pattern expansion is done.
"""

from __future__ import annotations

import enum
import logging
import os
import re
from typing import Sequence

from .argscan import extract_hostname

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16384
MARKER = b"Host .fast "

_SPACE = ord(" ")
_NEWLINE = ord("\n")
_DELIMITER = re.compile(rb"[ \n]")

# Partial length of a hostname token that has already diverged
_MISMATCH = -1


class ScanState(enum.Enum):
    SEEKING_LINE_START = "seeking_line_start"
    MATCHING_MARKER_PREFIX = "matching_marker_prefix"
    MATCHING_HOSTNAME_TOKEN = "matching_hostname_token"
    SKIPPING_REST_OF_LINE = "skipping_rest_of_line"


class MarkerScanner:
    """Resumable scanner answering "is hostname listed on a marker line?".

    Call feed() with consecutive chunks of the file, then finish() at end
    of file. feed() returns True as soon as a match is seen; the caller
    may stop reading at that point.
    """

    def __init__(self, hostname: str | bytes):
        if isinstance(hostname, str):
            hostname = os.fsencode(hostname)
        self.hostname = hostname
        self.state = ScanState.SEEKING_LINE_START
        self.partial = 0
        self.matched = False

    def _enter(self, state: ScanState, partial: int = 0) -> None:
        self.state = state
        self.partial = partial

    def feed(self, chunk: bytes) -> bool:
        """Consume the next chunk. Returns True once the hostname matched."""
        if self.matched or not self.hostname:
            return self.matched

        pos = 0
        end = len(chunk)
        while pos < end:
            state = self.state

            if state is ScanState.SKIPPING_REST_OF_LINE:
                newline = chunk.find(b"\n", pos)
                if newline < 0:
                    return False
                pos = newline + 1
                self._enter(ScanState.SEEKING_LINE_START)

            elif state is ScanState.SEEKING_LINE_START:
                while pos < end and chunk[pos] in (_SPACE, _NEWLINE):
                    pos += 1
                if pos < end:
                    self._enter(ScanState.MATCHING_MARKER_PREFIX)

            elif state is ScanState.MATCHING_MARKER_PREFIX:
                wanted = MARKER[self.partial:]
                piece = chunk[pos:pos + len(wanted)]
                if not wanted.startswith(piece):
                    self._enter(ScanState.SKIPPING_REST_OF_LINE)
                elif len(piece) < len(wanted):
                    self.partial += len(piece)
                    pos = end
                else:
                    pos += len(piece)
                    self._enter(ScanState.MATCHING_HOSTNAME_TOKEN)

            else:
                pos = self._feed_hostname(chunk, pos)
                if self.matched:
                    return True

        return False

    def _feed_hostname(self, chunk: bytes, pos: int) -> int:
        """Advance through the hostname list of a marker line."""
        byte = chunk[pos]
        if byte == _SPACE or byte == _NEWLINE:
            if self.partial == len(self.hostname):
                self.matched = True
                return pos
            if byte == _NEWLINE:
                self._enter(ScanState.SEEKING_LINE_START)
            else:
                self.partial = 0
            return pos + 1

        found = _DELIMITER.search(chunk, pos)
        token_end = found.start() if found else len(chunk)
        if self.partial != _MISMATCH:
            token = chunk[pos:token_end]
            stop = self.partial + len(token)
            if stop <= len(self.hostname) and self.hostname[self.partial:stop] == token:
                self.partial = stop
            else:
                self.partial = _MISMATCH
        return token_end

    def finish(self) -> bool:
        """Signal end of file. A token ended by end of file still counts."""
        if self.matched:
            return True
        return (
            bool(self.hostname)
            and self.state is ScanState.MATCHING_HOSTNAME_TOKEN
            and self.partial == len(self.hostname)
        )


def scan_file(path: str, hostname: str, chunk_size: int = CHUNK_SIZE) -> bool:
    """Return True if hostname is listed on a marker line of the file.

    Unreadable or missing files count as no match.
    """
    scanner = MarkerScanner(hostname)
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    return scanner.finish()
                if scanner.feed(chunk):
                    return True
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return False


def is_fast_host(
    config_path: str,
    args: Sequence[str],
    flags_with_arg: frozenset[str] | None = None,
    chunk_size: int = CHUNK_SIZE,
) -> bool:
    """Check whether the host named in args is opted in by config_path.

    Args:
        config_path: ssh config file to scan
        args: ssh arguments, without the program name
        flags_with_arg: Value-taking flag letters for argument scanning
        chunk_size: Read size

    Returns:
        True if the destination hostname is listed on a marker line.
    """
    hostname = extract_hostname(args, flags_with_arg)
    if not hostname:
        return False
    matched = scan_file(config_path, hostname, chunk_size)
    logger.debug("Host %r in %s: %s", hostname, config_path, matched)
    return matched
