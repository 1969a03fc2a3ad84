"""Blocking multi-producer/multi-consumer queue of pending directory nodes."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class WorkQueue(Generic[T]):
    """FIFO queue whose ``pop`` blocks until work arrives or the queue is done.

    Each pushed item is handed to exactly one popper. After ``mark_done``
    further pushes are ignored and poppers drain what is left, then get ``None``.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._items: deque[T] = deque()
        self._done = False

    def push(self, item: T) -> None:
        with self._condition:
            if self._done:
                return
            self._items.append(item)
            self._condition.notify()

    def pop(self) -> T | None:
        with self._condition:
            while True:
                if self._items:
                    return self._items.popleft()
                if self._done:
                    return None
                self._condition.wait()

    def mark_done(self) -> None:
        with self._condition:
            self._done = True
            self._condition.notify_all()

    @property
    def done(self) -> bool:
        with self._condition:
            return self._done

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)


__all__ = ["WorkQueue"]
