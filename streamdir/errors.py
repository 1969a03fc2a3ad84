"""Exception hierarchy shared by the listing engine and its collaborators.

Per-directory failures are ordinary values carried on a node; the remaining
errors are fatal to a run and surface at the CLI as a non-zero exit.
"""

from __future__ import annotations

import errno
from pathlib import Path

REASON_NOT_FOUND = "not-found"
REASON_ACCESS_DENIED = "access-denied"
REASON_IO = "io"


class StreamdirError(Exception):
    """Base class for all streamdir errors."""


class EnumerationError(StreamdirError):
    """One directory could not be enumerated.

    Local to a single node: the walker renders it in place and keeps going.
    """

    def __init__(self, path: Path, detail: str, reason: str = REASON_IO) -> None:
        super().__init__(detail)
        self.path = path
        self.detail = detail
        self.reason = reason

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> EnumerationError:
        """Classify an ``OSError`` raised while scanning ``path``."""
        if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
            reason = REASON_NOT_FOUND
            detail = f"{path}: path not found"
        elif isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
            reason = REASON_ACCESS_DENIED
            detail = f"{path}: access denied"
        else:
            reason = REASON_IO
            detail = f"{path}: {exc.strerror or exc}"
        return cls(path, detail, reason)


class PoolStartupError(StreamdirError):
    """Worker threads could not be started; nothing was listed."""


class ListingFault(StreamdirError):
    """A worker died on an unexpected exception; the run's output is incomplete."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"worker failed while listing {path}: {cause!r}")
        self.path = path
        self.cause = cause


class NodeStateError(StreamdirError):
    """A directory node was asked to make an illegal state transition."""


__all__ = [
    "REASON_NOT_FOUND",
    "REASON_ACCESS_DENIED",
    "REASON_IO",
    "StreamdirError",
    "EnumerationError",
    "PoolStartupError",
    "ListingFault",
    "NodeStateError",
]
