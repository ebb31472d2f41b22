"""
pathpad.ui

Console output for pathpad, built on Rich.

stdout is reserved for the PATH value itself (so `export PATH="$(pad ...)"`
works); every message, listing decoration and diff goes to stderr unless a
caller hands in another console.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Iterable, List, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

PRINT_MODES = ("default", "lines", "single")

_THEME = Theme(
    {
        "ui.info": "cyan",
        "ui.success": "green bold",
        "ui.warn": "yellow bold",
        "ui.error": "red bold",
        "ui.header": "bold blue",
        "ui.dim": "dim",
        "ui.ok": "green",
        "ui.miss": "red",
        "ui.added": "green",
        "ui.removed": "red",
    }
)

console = Console(theme=_THEME, stderr=True, highlight=False, soft_wrap=True)

QUIET = False


def set_quiet(quiet: bool) -> None:
    """Suppress warnings and success messages; errors are controlled by the caller."""
    global QUIET
    QUIET = bool(quiet)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=verbosity >= 2)],
        force=True,
    )


# ---------- Basic messages ----------


def log_info(message: str) -> None:
    if not QUIET:
        console.print(f"[ui.info]{escape(message)}[/]")


def log_warning(message: str) -> None:
    if not QUIET:
        console.print(f"[ui.warn]warning:[/] {escape(message)}")


def log_error(message: str) -> None:
    console.print(f"[ui.error]error:[/] {escape(message)}")


def log_success(message: str) -> None:
    if not QUIET:
        console.print(f"[ui.success]{escape(message)}[/]")


# ---------- Listings ----------


def _stdout_console(out) -> Console:
    return Console(theme=_THEME, file=out, highlight=False, soft_wrap=True)


def print_entries(
    entries: Sequence[str],
    *,
    mode: str = "default",
    exists: Callable[[str], bool] = os.path.isdir,
    title: str = "PATH",
    out=None,
) -> None:
    """
    Print entries in one of the PRINT_MODES:
      default: numbered with an OK/MISS badge
      lines:   one entry per line on stdout
      single:  joined with os.pathsep on stdout
    """
    out = out or sys.stdout
    if mode not in PRINT_MODES:
        mode = "default"
    if mode == "single":
        print(os.pathsep.join(entries), file=out)
        return
    if mode == "lines":
        for e in entries:
            print(e, file=out)
        return
    listing = _stdout_console(out)
    listing.print(f"[ui.header]{title}:[/]")
    if not entries:
        listing.print("  [ui.dim]<empty>[/]")
        return
    width = len(str(len(entries)))
    seen = set()
    for i, e in enumerate(entries, 1):
        ok = exists(e)
        badge = "[ui.ok]OK[/]" if ok else "[ui.miss]MISS[/]"
        pad = "  " if ok else ""
        dup = " [ui.dim](duplicate)[/]" if e in seen else ""
        seen.add(e)
        listing.print(f"  {str(i).rjust(width)}. \\[{badge}]{pad} {escape(e)}{dup}")


def diff_lines(old: Sequence[str], new: Sequence[str]) -> List[str]:
    """'+ x' for added entries, '- x' for removed ones, '  x' for kept ones (in new order)."""
    old_set, new_set = set(old), set(new)
    lines = [("  " if e in old_set else "+ ") + e for e in new]
    lines.extend("- " + e for e in old if e not in new_set)
    return lines


def print_diff(old: Sequence[str], new: Sequence[str], *, title: str = "PATH") -> None:
    console.print(f"[ui.header]Diff for {title}:[/]")
    for line in diff_lines(old, new):
        style = {"+": "ui.added", "-": "ui.removed"}.get(line[0], "ui.dim")
        console.print(f"  [{style}]{escape(line)}[/]")


def print_preview(before: str, after: str, *, variable: str = "PATH") -> None:
    """Dry-run output: raw value before and after the change."""
    console.print(f"{variable} before modification:\n\t{before}", markup=False)
    console.print(f"{variable} after modification:\n\t{after}", markup=False)


def print_revisions(revisions: Iterable[str], *, out=None) -> None:
    listing = _stdout_console(out or sys.stdout)
    any_printed = False
    for i, rev in enumerate(revisions, 1):
        listing.print(f"[ui.header]{i}[/] {escape(rev)}")
        any_printed = True
    if not any_printed:
        listing.print("[ui.dim]<no history>[/]")
