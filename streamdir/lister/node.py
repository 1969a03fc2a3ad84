"""Directory nodes: one scan's results plus a one-shot completion signal."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from ..errors import NodeStateError
from ..file_model import DirectoryCounters, FileInfo
from .cancellation import CancellationToken


class DirStatus(Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({DirStatus.DONE, DirStatus.ERROR, DirStatus.CANCELLED})


class DirectoryNode:
    """One directory in the discovery tree.

    A single worker moves the node through ``WAITING -> IN_PROGRESS ->
    terminal`` and is the only writer of ``matches``, ``counters`` and
    ``children``. The consumer reads those fields only after
    ``wait_until_terminal`` has returned a terminal status.
    """

    def __init__(self, path: Path, file_specs: Sequence[str]) -> None:
        self.path = Path(path)
        self.file_specs: tuple[str, ...] = tuple(file_specs)
        self.matches: tuple[FileInfo, ...] = ()
        self.counters = DirectoryCounters()
        self.error: str | None = None
        self.children: list[DirectoryNode] = []
        self._status = DirStatus.WAITING
        self._condition = threading.Condition()

    def __repr__(self) -> str:
        return f"DirectoryNode({str(self.path)!r}, status={self._status.value})"

    @property
    def status(self) -> DirStatus:
        with self._condition:
            return self._status

    def claim(self) -> None:
        with self._condition:
            if self._status is not DirStatus.WAITING:
                raise NodeStateError(f"cannot claim {self.path} in state {self._status.value}")
            self._status = DirStatus.IN_PROGRESS

    def add_child(self, child: DirectoryNode) -> None:
        with self._condition:
            if self._status is not DirStatus.IN_PROGRESS:
                raise NodeStateError(f"cannot add children to {self.path} in state {self._status.value}")
            self.children.append(child)

    def complete(self, matches: Iterable[FileInfo], counters: DirectoryCounters) -> None:
        with self._condition:
            self._require(DirStatus.IN_PROGRESS, target=DirStatus.DONE)
            self.matches = tuple(matches)
            self.counters = counters
            self._finish(DirStatus.DONE)

    def fail(self, detail: str) -> None:
        with self._condition:
            self._require(DirStatus.IN_PROGRESS, target=DirStatus.ERROR)
            self.error = detail
            self._finish(DirStatus.ERROR)

    def cancel(self) -> None:
        with self._condition:
            self._require(DirStatus.WAITING, DirStatus.IN_PROGRESS, target=DirStatus.CANCELLED)
            self._finish(DirStatus.CANCELLED)

    def wait_until_terminal(self, token: CancellationToken | None = None) -> DirStatus:
        """Block until the node finishes or ``token`` fires.

        Returns the terminal status, or ``CANCELLED`` when the token fired first.
        """
        unregister = token.register(self._wake) if token is not None else None
        try:
            with self._condition:
                while not self._status.is_terminal:
                    if token is not None and token.cancelled:
                        return DirStatus.CANCELLED
                    self._condition.wait()
                return self._status
        finally:
            if unregister is not None:
                unregister()

    def release(self) -> list[DirectoryNode]:
        """Hand the children to the caller and drop this node's results."""
        with self._condition:
            if not self._status.is_terminal:
                raise NodeStateError(f"cannot release {self.path} in state {self._status.value}")
            children = self.children
            self.children = []
            self.matches = ()
            return children

    def _require(self, *allowed: DirStatus, target: DirStatus) -> None:
        if self._status not in allowed:
            raise NodeStateError(
                f"illegal transition for {self.path}: {self._status.value} -> {target.value}"
            )

    def _finish(self, status: DirStatus) -> None:
        self._status = status
        self._condition.notify_all()

    def _wake(self) -> None:
        with self._condition:
            self._condition.notify_all()


__all__ = ["DirStatus", "DirectoryNode"]
