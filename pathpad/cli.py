from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, List, Sequence

from . import __version__, engine, ui
from .config import Settings, load_config, platform_config_default
from .entries import normalize_entry, split_path_like
from .errors import InvalidInputError, PathPadError
from .history import append_history, get_nth_last_revision, recent_revisions
from .store import EnvironmentPathStore, ProcessEnvStore, get_store

LOG = logging.getLogger("pathpad.cli")


def _epilog() -> str:
    return (
        "Examples:\n"
        '  export PATH="$(pad add ~/.local/bin)"\n'
        '  export PATH="$(pad up /usr/local/bin 2)"\n'
        "  pad clean --dry-run\n"
        "  pad ls --mode lines\n"
        "\n"
        "Commands that change PATH print the new value on stdout; on failure they\n"
        "print the unchanged value, so the assignment above never breaks your shell.\n"
        "\n"
        f"Default config path: {platform_config_default()}\n"
    )


def _whole_number(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid whole number: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return n


def _count(value, what: str, minimum: int = 0) -> int:
    # not an argparse type: bad values must reach the PathPadError handler in main()
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{what} must be a whole number, got {value!r}. No changes made.") from None
    if n < minimum:
        raise InvalidInputError(f"{what} must be at least {minimum}, got {value!r}. No changes made.")
    return n


def _add_common_write_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--quiet", "-q", action="store_true", help="Don't print warnings when modifying `$PATH`.")
    p.add_argument("--history", "-H", action="store_true", help="Add current `$PATH` to the history.")
    p.add_argument("--dry-run", "-n", action="store_true",
                   help="Don't do anything, just preview what this command would do.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pad",
        description="Inspect and edit the directories in `$PATH`.",
        epilog=_epilog(),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", "-c", help="Path to config TOML (overrides PATHPAD_CONFIG & defaults)")
    p.add_argument("--verbose", "-v", action="count", default=0, help="More log output (-vv for debug).")

    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("ls", aliases=["echo"], help="List the directories in `$PATH`.")
    sp.add_argument("--mode", "-m", choices=ui.PRINT_MODES, default="default",
                    help="Print mode: default (numbered+OK/MISS), lines, single.")
    sp.set_defaults(func=cmd_ls)

    sp = sub.add_parser("add", help="Add a directory.")
    sp.add_argument("dirs", nargs="*", default=["."], metavar="dir", help="Directory(ies) to add.")
    sp.add_argument("--force", "-f", action="store_true",
                    help="Forcefully add a directory that doesn't necessarily exist.")
    sp.add_argument("--prepend", "-p", action="store_true",
                    help="Make this directory the highest priority by prepending it to `$PATH`.")
    _add_common_write_flags(sp)
    sp.set_defaults(func=cmd_add)

    sp = sub.add_parser("rm", aliases=["del"], help="Remove a directory.")
    sp.add_argument("dir", nargs="?", default=".", help="Directory to remove.")
    _add_common_write_flags(sp)
    sp.set_defaults(func=cmd_rm)

    for name, aliases, direction, text in (
        ("up", ["inc"], -1, "Increase priority for a directory."),
        ("dn", ["dec", "down"], 1, "Decrease priority for a directory."),
    ):
        sp = sub.add_parser(name, aliases=aliases, help=text)
        sp.add_argument("dir", nargs="?", default=".", help="Directory to move.")
        sp.add_argument("jump", nargs="?", default="1",
                        help="Move the directory JUMP spots in `$PATH` (default: 1).")
        _add_common_write_flags(sp)
        sp.set_defaults(func=cmd_move, direction=direction)

    sp = sub.add_parser("clean", aliases=["dedup"], help="Remove duplicates and non-existent directories.")
    _add_common_write_flags(sp)
    sp.set_defaults(func=cmd_clean)

    sp = sub.add_parser("revert", help="Revert to a previous version of `$PATH`.")
    sp.add_argument("revision", nargs="?", default="1",
                    help="`$PATH` revision number to revert to (1 = most recent).")
    _add_common_write_flags(sp)
    sp.set_defaults(func=cmd_revert)

    sp = sub.add_parser("history", help="Show recorded `$PATH` revisions, newest first.")
    sp.add_argument("--limit", "-l", type=_whole_number, default=10, help="How many revisions to show.")
    sp.set_defaults(func=cmd_history)

    return p


# ---------- helpers ----------


def _record_history(args: argparse.Namespace, settings: Settings, raw: str) -> None:
    if args.dry_run or not (args.history or settings.record_history):
        return
    path = settings.history_path()
    append_history(raw, path)
    LOG.info("Saved previous %s to %s", settings.variable, path)


def _apply(
    args: argparse.Namespace,
    settings: Settings,
    store: EnvironmentPathStore,
    change: Callable[[List[str]], List[str]],
) -> int:
    """Read, transform with one engine call, record history, write."""
    raw = store.read_raw()
    current = split_path_like(raw)
    updated = change(current)

    if args.dry_run:
        ui.print_diff(current, updated, title=settings.variable)
    elif updated == current:
        ui.log_info(f"No changes to {settings.variable}.")

    _record_history(args, settings, raw)
    store.write(updated, dry_run=args.dry_run)

    if (
        not args.dry_run
        and isinstance(store, ProcessEnvStore)
        and getattr(store.stream, "isatty", lambda: False)()
    ):
        ui.log_warning(
            f"Printed the new {settings.variable} only; apply it with "
            f'`export {settings.variable}="$(pad {args.cmd} ...)"`.'
        )
    return 0


def _validate_new_dirs(dirs: Sequence[str], force: bool) -> None:
    if force:
        return
    for d in dirs:
        if not os.path.isdir(normalize_entry(d)):
            raise InvalidInputError(
                f"Directory `{d}` does not exist. Please double check the directories you intend to add, "
                "or use `pad add -f` to force it."
            )


# ---------- commands ----------


def cmd_ls(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    ui.print_entries(store.read_entries(), mode=args.mode, title=settings.variable)
    return 0


def cmd_add(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    _validate_new_dirs(args.dirs, args.force)
    return _apply(args, settings, store, lambda cur: engine.add(cur, args.dirs, prepend=args.prepend))


def cmd_rm(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    return _apply(args, settings, store, lambda cur: engine.remove(cur, args.dir))


def cmd_move(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    jump = _count(args.jump, "Jump")
    return _apply(args, settings, store, lambda cur: engine.reorder(cur, args.dir, args.direction * jump))


def cmd_clean(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    def change(cur: List[str]) -> List[str]:
        for d in engine.duplicate_entries(cur):
            LOG.info("Dropping duplicate %s", d)
        for d in engine.missing_entries(cur):
            LOG.info("Dropping missing directory %s", d)
        return engine.clean(cur)

    return _apply(args, settings, store, change)


def cmd_revert(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    previous = get_nth_last_revision(_count(args.revision, "Revision", minimum=1), settings.history_path())
    return _apply(args, settings, store, lambda _cur: split_path_like(previous))


def cmd_history(args: argparse.Namespace, settings: Settings, store: EnvironmentPathStore) -> int:
    ui.print_revisions(recent_revisions(args.limit, settings.history_path()))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cmd is None:
        args = parser.parse_args([*argv, "ls"])

    ui.setup_logging(args.verbose)
    quiet = getattr(args, "quiet", False)
    ui.set_quiet(quiet)

    store = None
    try:
        settings = load_config(args.config)
        store = get_store(settings)
        return args.func(args, settings, store)
    except PathPadError as e:
        if not quiet:
            ui.log_error(str(e))
        if hasattr(args, "dry_run") and not args.dry_run:
            (store or ProcessEnvStore()).emit_unchanged()
        return e.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
