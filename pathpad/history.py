"""
pathpad.history

Append-only log of previous PATH values, one raw value per line, newest
last. Revision 1 is the most recent line. Lookups read the file backwards in
blocks so only the tail that is actually needed gets loaded.
"""
from __future__ import annotations

import itertools
import logging
import os
import pathlib
from typing import Iterator, List

from .errors import InvalidInputError, NotFoundError, PathPadIOError

LOG = logging.getLogger("pathpad.history")

BLOCK_SIZE = 8192


def append_history(raw_value: str, path: pathlib.Path) -> None:
    """Append the pre-mutation PATH value to the history file."""
    if "\n" in raw_value or "\r" in raw_value:
        raise InvalidInputError("PATH value contains a newline and cannot be recorded in history.")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(raw_value + "\n")
    except (OSError, UnicodeError) as e:
        raise PathPadIOError(f"Could not write PATH history to {path}: {e}") from e
    LOG.debug("Recorded PATH revision in %s", path)


def _reverse_lines(f, block_size: int) -> Iterator[bytes]:
    f.seek(0, os.SEEK_END)
    pos = f.tell()
    tail = b""
    while pos > 0:
        step = min(block_size, pos)
        pos -= step
        f.seek(pos)
        chunk = f.read(step) + tail
        lines = chunk.split(b"\n")
        # first piece may be a partial line; keep it for the next block
        tail = lines.pop(0)
        for line in reversed(lines):
            yield line
    yield tail


def iter_revisions(path: pathlib.Path, *, block_size: int = BLOCK_SIZE) -> Iterator[str]:
    """Yield recorded PATH values newest-first, skipping blank lines."""
    if not path.exists():
        raise PathPadIOError(f"PATH history file {path} not found. Nothing to revert to.")
    try:
        with open(path, "rb") as f:
            for line in _reverse_lines(f, block_size):
                text = line.decode("utf-8").rstrip("\r")
                if text.strip():
                    yield text
    except OSError as e:
        raise PathPadIOError(f"Could not read PATH history {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise PathPadIOError(f"PATH history {path} is not valid UTF-8: {e}") from e


def get_nth_last_revision(n: int, path: pathlib.Path) -> str:
    """Return the Nth most recent recorded PATH value (1 = most recent)."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidInputError(f"Revision must be a positive whole number, got {n!r}.")
    count = 0
    for value in iter_revisions(path):
        count += 1
        if count == n:
            return value
    raise NotFoundError(f"Only {count} revision(s) recorded in {path}; cannot go back {n}.")


def recent_revisions(limit: int, path: pathlib.Path) -> List[str]:
    return list(itertools.islice(iter_revisions(path), max(limit, 0)))
