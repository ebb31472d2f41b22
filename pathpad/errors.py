"""Exceptions raised by pathpad.

Every engine operation either returns a brand new list or raises one of
these; the caller's list is never touched, so a failure means no changes.
"""
from __future__ import annotations


class PathPadError(Exception):
    """Base class for all pathpad errors."""

    exit_code = 1


class NotFoundError(PathPadError, LookupError):
    """An entry (or history revision) that was asked for does not exist."""


class AlreadyExistsError(PathPadError):
    """An entry being added is already present."""

    def __init__(self, message: str, entry: str | None = None):
        super().__init__(message)
        self.entry = entry


class InvalidInputError(PathPadError, ValueError):
    """Bad user input: a non-integer jump, a missing directory without --force, ..."""


class PathPadIOError(PathPadError, OSError):
    """Reading/writing the history file or the environment store failed."""

    exit_code = 3
