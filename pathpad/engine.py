"""
pathpad.engine

Pure list operations on PATH entries. Nothing here reads or writes the
environment or the filesystem directly; existence checks come in as an
injected predicate. Every function returns a new list and leaves its input
untouched, so a raised error always means "no changes made".
"""
from __future__ import annotations

import os
from typing import Callable, Iterable, List, Sequence

from .entries import normalize_entries, normalize_entry
from .errors import AlreadyExistsError, InvalidInputError, NotFoundError

ExistsPredicate = Callable[[str], bool]


def _index_of(entries: Sequence[str], target: str) -> int:
    try:
        return list(entries).index(target)
    except ValueError:
        raise NotFoundError(f"Directory `{target}` not found in `$PATH`. No changes made.") from None


def _check_jump(jump) -> int:
    if isinstance(jump, bool) or not isinstance(jump, int):
        raise InvalidInputError(f"Jump must be a whole number, got {jump!r}. No changes made.")
    return jump


def reorder(entries: Sequence[str], target: str, jump: int) -> List[str]:
    """
    Move `target` by `jump` positions.

    Negative jumps move toward index 0 (higher priority), positive jumps toward
    the end. The new position is clamped to the list bounds, so an oversized
    jump parks the entry at the front or the back.
    """
    _check_jump(jump)
    current = list(entries)
    target = normalize_entry(target)
    i = _index_of(current, target)
    n = len(current)
    new_idx = min(max(i + jump, 0), n - 1)

    if jump == 0:
        return current
    if jump < 0:
        return current[:new_idx] + [target] + current[new_idx:i] + current[i + 1:]
    # the entry at new_idx shifts left too, hence the inclusive upper bound
    return current[:i] + current[i + 1:new_idx + 1] + [target] + current[new_idx + 1:]


def increase_priority(entries: Sequence[str], target: str, jump: int = 1) -> List[str]:
    return reorder(entries, target, -_check_jump(jump))


def decrease_priority(entries: Sequence[str], target: str, jump: int = 1) -> List[str]:
    return reorder(entries, target, jump)


def add(entries: Sequence[str], new_entries: Iterable[str], *, prepend: bool = False) -> List[str]:
    """
    Add directories to the list, before everything else when `prepend`.

    The duplicate check covers the whole batch before anything is added.
    """
    current = list(entries)
    existing = set(current)
    cleaned: List[str] = []
    for d in normalize_entries(new_entries):
        if d in existing:
            raise AlreadyExistsError(
                f"Directory `{d}` already exists in `$PATH`. Use `pad up/dn` to change priority "
                "of this directory. No changes made.",
                entry=d,
            )
        if d not in cleaned:
            cleaned.append(d)
    if prepend:
        return cleaned + current
    return current + cleaned


def remove(entries: Sequence[str], target: str) -> List[str]:
    """Drop the first occurrence of `target`."""
    current = list(entries)
    i = _index_of(current, normalize_entry(target))
    del current[i]
    return current


def clean(entries: Iterable[str], exists: ExistsPredicate = os.path.isdir) -> List[str]:
    """
    Keep only existing, unique directories.

    The first occurrence stays where it is and later ones are dropped, so the
    effective lookup order of the survivors does not change.
    Entries are compared in normalized form, so "/a/" and "/a" are duplicates.
    """
    seen = set()
    out: List[str] = []
    for e in normalize_entries(entries):
        if e in seen or not exists(e):
            continue
        seen.add(e)
        out.append(e)
    return out


def missing_entries(entries: Iterable[str], exists: ExistsPredicate = os.path.isdir) -> List[str]:
    return [e for e in entries if not exists(e)]


def duplicate_entries(entries: Iterable[str]) -> List[str]:
    """Entries that appear again after their first occurrence, in order of first repeat."""
    seen, dups = set(), []
    for e in normalize_entries(entries):
        if e in seen and e not in dups:
            dups.append(e)
        seen.add(e)
    return dups
