"""2-phase duplicate detection: file size grouping, then SHA256 hashing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import wait
from dupdetect.errors import HashError
from dupdetect.scanner import bucket_by_size
from dupdetect.scanner import SizeGroups
from tqdm import tqdm

import hashlib
import logging


logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

HashGroups = dict[str, list[str]]


def hash_file(path: str, chunk_size: int = CHUNK_SIZE) -> str:
    """Compute SHA256 hash of a file."""
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            sha.update(chunk)
    return sha.hexdigest()


def _hash_or_fail(path: str, chunk_size: int) -> str:
    try:
        return hash_file(path, chunk_size)
    except OSError as e:
        raise HashError(path, e) from e


def _hash_sequential(paths: list[str], chunk_size: int, bar: tqdm) -> list[str]:
    digests = []
    for p in paths:
        digests.append(_hash_or_fail(p, chunk_size))
        bar.update()
    return digests


def _hash_parallel(paths: list[str], chunk_size: int, jobs: int, bar: tqdm) -> list[str]:
    """Hash *paths* on a thread pool, stopping at the first failure.

    Digests are returned in the order of *paths*.
    """
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(_hash_or_fail, p, chunk_size) for p in paths]
        for f in futures:
            f.add_done_callback(lambda _: bar.update())
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for f in futures:
            if f in done and f.exception() is not None:
                for p in pending:
                    p.cancel()
                raise f.exception()
    return [f.result() for f in futures]


def group_by_hash(
    size_groups: SizeGroups,
    chunk_size: int = CHUNK_SIZE,
    jobs: int = 1,
    progress: bool = False,
) -> HashGroups:
    """Group files sharing a size with at least one other file by content digest.

    Buckets holding a single file are skipped without opening it. Paths are
    grouped in bucket order, then in their order within the bucket.
    """
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    candidates = [(size, group) for size, group in size_groups.items() if len(group) >= 2]
    paths = [p for _, group in candidates for p in group]
    logger.debug(
        f"phase 2 (hashing): {len(paths)} files in {len(candidates)} size group(s), "
        f"{len(size_groups) - len(candidates)} unique by size"
    )

    with tqdm(total=len(paths), desc="Hashing", unit="file", disable=not progress) as bar:
        if jobs == 1 or len(paths) < 2:
            digests = _hash_sequential(paths, chunk_size, bar)
        else:
            digests = _hash_parallel(paths, chunk_size, jobs, bar)

    result: HashGroups = defaultdict(list)
    for p, h in zip(paths, digests):
        logger.debug(f"  {h[:12]}.. {p}")
        result[h].append(p)

    dupes = sum(1 for g in result.values() if len(g) >= 2)
    logger.debug(f"phase 2 (hashing): {len(paths)} files hashed, {dupes} duplicate group(s)")
    return dict(result)


def find_duplicates(
    roots: Iterable[str],
    ignore_empty: bool = False,
    chunk_size: int = CHUNK_SIZE,
    jobs: int = 1,
    progress: bool = False,
) -> HashGroups:
    """Find duplicate files below *roots* using 2-phase detection.

    Phase 1: Group files by size (cheap).
    Phase 2: For same-size groups, compute SHA256 and group by hash.
    """
    size_groups = bucket_by_size(roots, ignore_empty=ignore_empty)
    return group_by_hash(size_groups, chunk_size=chunk_size, jobs=jobs, progress=progress)
