"""Duplicate set reporting, deletion confirmation and removal of redundant copies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from dupdetect.errors import DeletionError
from dupdetect.hasher import HashGroups

import logging
import os


logger = logging.getLogger(__name__)

DIGEST_LENGTH = 10

CONFIRM_PROMPT = "WARNING: deleting duplicated files is enabled. Do you want to continue ? (y/N) "


@dataclass
class DuplicateSet:
    """A group of files with identical content."""

    digest: str
    paths: list[str]

    @property
    def kept(self) -> str:
        return self.paths[0]

    @property
    def redundant(self) -> list[str]:
        return self.paths[1:]


def duplicate_sets(hash_groups: HashGroups) -> list[DuplicateSet]:
    """Return the digest groups holding more than one path, in grouping order."""
    return [DuplicateSet(digest=h, paths=list(paths)) for h, paths in hash_groups.items() if len(paths) >= 2]


def format_report(sets: list[DuplicateSet], digest_length: int = DIGEST_LENGTH) -> list[str]:
    """Render duplicate sets as a digest header followed by one indented line per path.

    A *digest_length* of 0 shows the full digest.
    """
    lines: list[str] = []
    for s in sets:
        header = s.digest[:digest_length] if digest_length > 0 else s.digest
        lines.append(f"{header}:")
        lines.extend(f"\t{p}" for p in s.paths)
    return lines


def prompt_confirmation(input_fn=input, print_fn=print) -> bool:
    """Ask whether duplicates may be deleted. Only an exact ``y`` confirms."""
    print_fn(CONFIRM_PROMPT, end="")
    try:
        answer = input_fn()
    except EOFError:
        print_fn()
        return False
    return answer == "y"


def delete_duplicates(
    sets: list[DuplicateSet],
    print_fn: Callable[..., None] = print,
    remove: Callable[[str], None] = os.remove,
) -> list[str]:
    """Remove every path but the first of each set.

    Returns the removed paths. The first failing removal raises DeletionError
    and leaves the remaining sets untouched.
    """
    removed: list[str] = []
    for s in sets:
        logger.debug(f"keeping {s.kept}")
        seen = {os.path.abspath(s.kept)}
        for p in s.redundant:
            key = os.path.abspath(p)
            if key in seen:
                print_fn(f"\t{p} ... Path already listed in this group, skipped.")
                continue
            seen.add(key)
            print_fn(f"\t{p} ... Deleting duplicate.")
            try:
                remove(p)
            except OSError as e:
                raise DeletionError(p, e) from e
            removed.append(p)
    logger.debug(f"deleted {len(removed)} duplicate file(s)")
    return removed
