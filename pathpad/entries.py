"""
pathpad.entries

Normalization of individual PATH entries and conversion between the raw
PATH-like string and a list of entries.

A normalized entry:
- has no trailing separator (a bare root such as "/" or "C:\\" is kept),
- is absolute: relative paths are canonicalized when they exist on disk,
  otherwise they are joined onto the current working directory.

Two entries are the same entry iff their normalized strings are equal.
"""
from __future__ import annotations

import os
from typing import Iterable, List

from .errors import InvalidInputError

IS_WINDOWS = (os.name == "nt")


def _separators() -> str:
    # Windows accepts both as trailing characters
    return "\\/" if IS_WINDOWS else "/"


def strip_trailing_separators(raw: str) -> str:
    seps = _separators()
    stripped = raw.rstrip(seps)
    if not stripped:
        # "/" or "//": keep a single root separator
        return raw[:1]
    if IS_WINDOWS and len(stripped) == 2 and stripped[1] == ":" and len(raw) > 2:
        # "C:\" is a root, "C:" alone is a drive-relative path
        return stripped + raw[2]
    return stripped


def _has_unexpanded_reference(entry: str) -> bool:
    # %SystemRoot%\system32 in a registry value, $HOME/bin in a hand-written one
    return entry.startswith(("$", "~")) or (IS_WINDOWS and "%" in entry)


def make_absolute(entry: str, *, cwd: str | None = None) -> str:
    if os.path.isabs(entry) or _has_unexpanded_reference(entry):
        return entry
    base = cwd if cwd is not None else os.getcwd()
    candidate = os.path.join(base, entry)
    if os.path.exists(candidate):
        return os.path.realpath(candidate)
    return os.path.normpath(candidate)


def normalize_entry(raw: str | os.PathLike, *, cwd: str | None = None) -> str:
    """Return the normalized form of a single PATH entry."""
    text = os.fspath(raw).strip()
    if not text:
        raise InvalidInputError("Empty directory name given. No changes made.")
    return make_absolute(strip_trailing_separators(text), cwd=cwd)


def normalize_entries(raws: Iterable[str | os.PathLike], *, cwd: str | None = None) -> List[str]:
    return [normalize_entry(r, cwd=cwd) for r in raws]


def split_path_like(value: str | None, *, sep: str = os.pathsep, cwd: str | None = None) -> List[str]:
    """Split a PATH-like string into normalized entries, dropping empty tokens."""
    if not value:
        return []
    tokens = value.replace("\r", "").replace("\n", "").split(sep)
    return [normalize_entry(t, cwd=cwd) for t in tokens if t.strip()]


def join_path_like(entries: Iterable[str], *, sep: str = os.pathsep) -> str:
    """Combine entries back into a single PATH-like string."""
    entries = list(entries)
    for e in entries:
        if sep in e:
            raise InvalidInputError(
                f"Directory `{e}` contains the path separator {sep!r} and cannot be stored. No changes made."
            )
    return sep.join(entries)
