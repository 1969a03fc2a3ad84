"""Cancellation token shared by the driver, the worker pool, and node waiters."""

from __future__ import annotations

import threading
from collections.abc import Callable


def _noop() -> None:
    return None


class CancellationToken:
    """One-way stop flag with wake-up callbacks.

    A token built with a ``parent`` is cancelled whenever the parent is, so an
    engine run can stop its own workers without cancelling the caller's token.
    Callbacks run on the cancelling thread, outside the token lock.
    """

    def __init__(self, parent: CancellationToken | None = None) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._next_callback_id = 0
        self._detach_from_parent: Callable[[], None] = _noop
        if parent is not None:
            self._detach_from_parent = parent.register(self.cancel)

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> None:
        """Set the flag and run every registered callback once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancellation and return an unregister function.

        Registering on an already-cancelled token runs ``callback`` immediately.
        """
        with self._lock:
            if not self._cancelled:
                callback_id = self._next_callback_id
                self._next_callback_id += 1
                self._callbacks[callback_id] = callback

                def unregister() -> None:
                    with self._lock:
                        self._callbacks.pop(callback_id, None)

                return unregister
        callback()
        return _noop

    def child(self) -> CancellationToken:
        """Return a token linked to this one."""
        return CancellationToken(parent=self)

    def detach(self) -> None:
        """Stop following the parent token."""
        detach = self._detach_from_parent
        self._detach_from_parent = _noop
        detach()


__all__ = ["CancellationToken"]
