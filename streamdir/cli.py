"""Command-line front door for streamdir.

Parses CLI options, merges them over the config-file defaults and groups the
masks per directory. Each group is then listed by the concurrent engine.
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path

from .config import CONFIG_PATH, ListingDefaults, load_listing_defaults, save_listing_defaults
from .display import make_displayer
from .errors import StreamdirError
from .file_model import (
    SORT_ORDER_LETTERS,
    TIME_FIELD_LETTERS,
    AttributeFilter,
    ScandirEnumerator,
    SortDirection,
    SortOrder,
    SortSpec,
    parse_sort_spec,
)
from .lister import CancellationToken, ListingOptions, ListingTotals, resolve_thread_count, start
from .mask_grouper import group_masks_by_directory
from .theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "streamdir: %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_arg(value: str) -> tuple[SortOrder, SortDirection]:
    try:
        return parse_sort_spec(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _attributes_arg(value: str) -> AttributeFilter:
    try:
        return AttributeFilter.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr; DEBUG with ``--verbose``, else WARNING."""
    package_logger = logging.getLogger("streamdir")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamdir",
        description="List directory contents, scanning subdirectories in parallel.",
    )
    parser.add_argument(
        "masks",
        nargs="*",
        help="Directories, patterns, or dir/pattern masks. Defaults to * in the current directory.",
    )
    # None means "not given", so config defaults can be switched off per run.
    parser.add_argument(
        "-s",
        "--recurse",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List subdirectories recursively.",
    )
    parser.add_argument(
        "-w",
        "--wide",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wide listing: names in columns.",
    )
    parser.add_argument(
        "-b",
        "--bare",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Bare listing: names only.",
    )
    parser.add_argument(
        "-o",
        "--sort",
        type=_sort_arg,
        default=None,
        metavar="ORDER",
        help="Sort by n(ame), e(xtension), s(ize) or d(ate); reverse with a - prefix (--sort=-s).",
    )
    parser.add_argument(
        "-a",
        "--attributes",
        type=_attributes_arg,
        default=None,
        metavar="SPEC",
        help="Filter on attributes d h r x l s; prefix a letter with - to exclude it.",
    )
    parser.add_argument(
        "-t",
        "--time",
        choices=sorted(TIME_FIELD_LETTERS),
        default=None,
        help="Time field to show and sort by: w(ritten), c(reation), a(ccess).",
    )
    parser.add_argument(
        "--threads",
        type=_positive_int,
        default=None,
        help="Cap on worker threads (default: CPU count).",
    )
    parser.add_argument("--single-threaded", action="store_true", help="Scan on the calling thread only.")
    parser.add_argument("--streams", action="store_true", help="Show extended attributes as streams.")
    parser.add_argument(
        "--no-color",
        dest="no_color",
        action="store_const",
        const=True,
        default=None,
        help="Disable color output even on TTY.",
    )
    parser.add_argument(
        "--color",
        dest="no_color",
        action="store_const",
        const=False,
        help="Allow color output, overriding a saved --no-color.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Listing theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--perf", action="store_true", help="Print elapsed time after the listing.")
    parser.add_argument("--show-config", action="store_true", help="Print the effective config defaults and exit.")
    parser.add_argument("--save-config", action="store_true", help="Store the given switches as defaults.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine activity to stderr.")
    return parser


def _pick(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def merge_defaults(args: argparse.Namespace, defaults: ListingDefaults) -> ListingDefaults:
    """Apply command-line switches on top of config defaults."""
    sort = defaults.sort
    if args.sort is not None:
        order, direction = args.sort
        sort = ("-" if direction is SortDirection.DESCENDING else "") + next(
            letter for letter, value in SORT_ORDER_LETTERS.items() if value is order
        )
    return ListingDefaults(
        threads=args.threads if args.threads is not None else defaults.threads,
        recurse=_pick(args.recurse, defaults.recurse),
        wide=_pick(args.wide, defaults.wide),
        bare=_pick(args.bare, defaults.bare),
        sort=sort,
        time_field=args.time or defaults.time_field,
        theme=args.theme if args.theme is not None else defaults.theme,
        no_color=_pick(args.no_color, defaults.no_color),
    )


def _sort_spec(settings: ListingDefaults) -> SortSpec:
    time_field = TIME_FIELD_LETTERS[settings.time_field]
    if settings.sort is None:
        return SortSpec(time_field=time_field)
    order, direction = parse_sort_spec(settings.sort)
    return SortSpec(order=order, direction=direction, time_field=time_field)


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[None]:
    """Turn Ctrl+C into a graceful cancellation of ``token``.

    The token is cancelled from a helper thread so the signal handler never
    takes locks the interrupted main thread may already hold.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handle_interrupt(signum: int, frame: object) -> None:
        threading.Thread(target=token.cancel, name="streamdir-interrupt", daemon=True).start()

    previous = signal.signal(signal.SIGINT, handle_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and list each requested directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory anchors relative masks.
    """
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    settings = merge_defaults(args, load_listing_defaults())
    if args.save_config:
        save_listing_defaults(settings)
    if args.show_config:
        payload = {"config_path": str(CONFIG_PATH), **asdict(settings)}
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
        return

    cwd = default_path if default_path is not None else Path.cwd()
    groups = group_masks_by_directory(args.masks, cwd)
    for group in groups:
        if not group.directory.is_dir():
            raise SystemExit(f"Path not found: {group.directory}")

    thread_count = 1 if args.single_threaded else resolve_thread_count(settings.threads)
    logger.debug("listing %d group(s) with %d thread(s)", len(groups), thread_count)

    no_color = settings.no_color or not sys.stdout.isatty()
    displayer = make_displayer(
        bare=settings.bare,
        wide=settings.wide,
        stream=sys.stdout,
        theme=resolve_theme(settings.theme, no_color=no_color),
        recurse=settings.recurse,
        time_field=TIME_FIELD_LETTERS[settings.time_field],
    )
    options = ListingOptions(
        recurse=settings.recurse,
        attribute_filter=args.attributes or AttributeFilter(),
        sort_spec=_sort_spec(settings),
    )
    enumerator = ScandirEnumerator(collect_streams=args.streams)

    token = CancellationToken()
    totals = ListingTotals()
    started = time.perf_counter()
    with cancel_on_interrupt(token):
        for index, group in enumerate(groups):
            if token.cancelled:
                break
            try:
                group_totals = start(
                    group.directory,
                    group.file_specs,
                    thread_count,
                    token,
                    enumerator=enumerator,
                    displayer=displayer,
                    options=options,
                    first=index == 0,
                )
            except StreamdirError as exc:
                raise SystemExit(f"streamdir: {exc}") from exc
            totals.add(group_totals)
    elapsed_ms = (time.perf_counter() - started) * 1000.0

    logger.debug(
        "listed %d files, %d directories, %d bytes",
        totals.file_count,
        totals.directory_count,
        totals.file_bytes,
    )
    if args.perf:
        sys.stdout.write(f"Time elapsed: {elapsed_ms:.2f} ms\n")
    if token.cancelled:
        raise SystemExit(130)


if __name__ == "__main__":
    main()
