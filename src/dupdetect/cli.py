"""CLI argument parsing and run orchestration."""

from __future__ import annotations

from dupdetect.config import create_config_interactive
from dupdetect.config import load_config
from dupdetect.config import merge_config_into_args
from dupdetect.errors import AbortedError
from dupdetect.errors import DetectionError
from dupdetect.hasher import group_by_hash
from dupdetect.logging import configure_logging
from dupdetect.reporter import delete_duplicates
from dupdetect.reporter import duplicate_sets
from dupdetect.reporter import DuplicateSet
from dupdetect.reporter import format_report
from dupdetect.reporter import prompt_confirmation
from dupdetect.scanner import bucket_by_size

import argparse
import logging
import sys


logger = logging.getLogger(__name__)

VERSION = "0.1.0"

_TRUE = ("true", "yes", "1", "y", "on")
_FALSE = ("false", "no", "0", "n", "off")


def _parse_bool(value: str) -> bool:
    v = value.lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {n}")
    return n


def _positive_int(value: str) -> int:
    n = _non_negative_int(value)
    if n == 0:
        raise argparse.ArgumentTypeError("must be at least 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Options left unset on the command line default to None so that the config
    file can fill them in.
    """
    parser = argparse.ArgumentParser(
        prog="dupdetect",
        description="Find files with identical content in one or more directory trees and optionally delete the redundant copies.",
    )
    parser.add_argument(
        "--version", action="version", version=f"Duplicated files detector : {VERSION}",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument(
        "--configure", action="store_true",
        help="Interactively create or update the config file and exit",
    )

    parser.add_argument(
        "--directoryPath", dest="directories", action="append", default=None, metavar="PATH",
        help="Path to the directory(ies) you want to check (repeatable, default: ./)",
    )
    parser.add_argument(
        "--ignoreEmpty", dest="ignore_empty", nargs="?", const=True, default=None,
        type=_parse_bool, metavar="BOOL",
        help="Ignore empty files (default: false)",
    )
    parser.add_argument(
        "--deleteDuplicates", dest="delete_duplicates", nargs="?", const=True, default=False,
        type=_parse_bool, metavar="BOOL",
        help="Delete found duplicates, keeping the first file of each group (use with caution!)",
    )
    parser.add_argument(
        "--digestLength", dest="digest_length", type=_non_negative_int, default=None, metavar="N",
        help="Number of digest characters shown per group, 0 for the full digest (default: 10)",
    )
    parser.add_argument(
        "--jobs", type=_positive_int, default=None, metavar="N",
        help="Number of threads used for hashing (default: 1)",
    )
    parser.add_argument(
        "--progress", action=argparse.BooleanOptionalAction, default=None,
        help="Show a progress bar while hashing (default: off)",
    )
    return parser


def run(args: argparse.Namespace, confirm=prompt_confirmation, print_fn=print) -> list[DuplicateSet]:
    """Scan, group, report and optionally delete duplicates.

    Errors propagate to the caller; nothing is deleted unless *confirm*
    returns True.
    """
    print_fn(f"Processing files in the following directory(ies): [{' '.join(args.directories)}]")

    size_groups = bucket_by_size(args.directories, ignore_empty=args.ignore_empty)
    hash_groups = group_by_hash(size_groups, jobs=args.jobs, progress=args.progress)
    sets = duplicate_sets(hash_groups)

    for line in format_report(sets, digest_length=args.digest_length):
        print_fn(line)
    if sets:
        redundant = sum(len(s.redundant) for s in sets)
        logger.info(f"Found {len(sets)} duplicate group(s) with {redundant} redundant file(s).")
    else:
        logger.info("No duplicates found.")

    if args.delete_duplicates:
        if not confirm():
            raise AbortedError("deletion of duplicated files was not confirmed")
        removed = delete_duplicates(sets, print_fn=print_fn)
        logger.info(f"Deleted {len(removed)} duplicate file(s).")

    return sets


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.configure:
        create_config_interactive()
        return

    merge_config_into_args(args, load_config())

    try:
        run(args)
    except AbortedError as e:
        logger.error(f"Aborted: {e}")
        sys.exit(1)
    except DetectionError as e:
        logger.error(f"error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        sys.exit(130)
