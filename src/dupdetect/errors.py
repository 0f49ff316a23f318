"""Errors that abort a duplicate detection run."""

from __future__ import annotations


class DetectionError(Exception):
    """Base class for fatal errors raised while detecting or deleting duplicates."""

    action = "process"

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is None:
            return f"cannot {self.action} {self.path}"
        reason = getattr(self.cause, "strerror", None) or self.cause
        return f"cannot {self.action} {self.path}: {reason}"


class TraversalError(DetectionError):
    """A root or an entry below it could not be listed or stat'd."""

    action = "scan"


class HashError(DetectionError):
    """A file selected for hashing could not be opened or fully read."""

    action = "hash"


class DeletionError(DetectionError):
    """A redundant copy could not be removed."""

    action = "delete"


class AbortedError(Exception):
    """The user refused the deletion confirmation."""
