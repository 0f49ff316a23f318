"""File discovery and size bucketing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dupdetect.errors import TraversalError

import logging
import os
import stat


logger = logging.getLogger(__name__)

SizeGroups = dict[int, list[str]]


@dataclass(frozen=True)
class FileRecord:
    """A filesystem entry discovered during traversal."""

    path: str
    size: int
    is_regular: bool


def _lstat(path: str) -> os.stat_result:
    try:
        return os.lstat(path)
    except OSError as e:
        raise TraversalError(path, e) from e


def _listdir(path: str) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        raise TraversalError(path, e) from e


def walk(root: str) -> Iterator[FileRecord]:
    """Recursively yield every entry below *root*, depth-first in lexical order.

    Symlinks are reported but never followed. Any stat or listing failure
    raises TraversalError.
    """
    stack = [root]
    while stack:
        path = stack.pop()
        st = _lstat(path)
        yield FileRecord(path=path, size=st.st_size, is_regular=stat.S_ISREG(st.st_mode))
        if stat.S_ISDIR(st.st_mode):
            stack.extend(os.path.join(path, name) for name in reversed(_listdir(path)))


def bucket_by_size(roots: Iterable[str], ignore_empty: bool = False) -> SizeGroups:
    """Group the regular files below *roots* by byte size.

    Roots are scanned in order. Overlapping roots yield the same path more
    than once; those entries are kept.
    """
    groups: SizeGroups = defaultdict(list)
    total = 0
    for root in roots:
        logger.debug(f"scanning {root}")
        for record in walk(root):
            if not record.is_regular:
                continue
            if ignore_empty and record.size == 0:
                continue
            groups[record.size].append(record.path)
            total += 1

    candidates = sum(1 for g in groups.values() if len(g) >= 2)
    logger.debug(f"phase 1 (size grouping): {total} files in {len(groups)} size bucket(s), {candidates} with more than one file")
    return dict(groups)
