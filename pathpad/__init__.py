"""
pathpad package

Inspect and edit the ordered directories of a PATH-style environment
variable: reorder, add, remove and clean entries, with an optional history
log to revert from.
"""

__version__ = "0.3.0"

from .engine import (
    add,
    clean,
    decrease_priority,
    increase_priority,
    remove,
    reorder,
)
from .entries import join_path_like, normalize_entry, split_path_like
from .errors import (
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
    PathPadError,
    PathPadIOError,
)

__all__ = [
    "__version__",
    "add",
    "clean",
    "decrease_priority",
    "increase_priority",
    "remove",
    "reorder",
    "join_path_like",
    "normalize_entry",
    "split_path_like",
    "AlreadyExistsError",
    "InvalidInputError",
    "NotFoundError",
    "PathPadError",
    "PathPadIOError",
]
